"""
# src/flight_stats/config.py
# Settings from config.json, .env and environment variables
"""

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .errors import ConfigError
from .utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = 'config.json'


@dataclass
class AppConfig:
    flight_emails: List[str] = field(default_factory=list)
    max_results: int = 300
    output_path: str = os.path.join('out', 'flightdata.csv')
    timeout: float = 30.0
    max_workers: int = 10
    credentials_path: str = os.path.join('credentials', 'credentials.json')
    token_path: str = os.path.join('credentials', 'token.pickle')
    debug: bool = False

    def validate(self) -> 'AppConfig':
        if not self.flight_emails:
            raise ConfigError(
                "No booking sender addresses configured. Set flight_emails in "
                "config.json, FLIGHT_STATS_SENDERS or pass --sender."
            )
        if self.max_results <= 0:
            raise ConfigError("max_results must be positive")
        if self.timeout <= 0:
            raise ConfigError("timeout must be positive")
        if self.max_workers <= 0:
            raise ConfigError("max_workers must be positive")
        return self


def _env_number(name: str, cast):
    value = os.getenv(name)
    if value is None or value == "":
        return None
    try:
        return cast(value)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {value!r}") from e


def _as_flag(value) -> bool:
    """Truthiness of a flag given as a JSON value or an environment string."""
    if isinstance(value, str):
        return value.strip().lower() in {'1', 'true', 'yes', 'on', 'debug'}
    return bool(value)


def _env_flag(name: str) -> Optional[bool]:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return _as_flag(value)


def _load_file(path: Path) -> dict:
    try:
        with path.open('r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load config {path}: {e}")
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return data


def load_config(path: Optional[str] = None) -> AppConfig:
    """
    Build the configuration.

    Precedence, lowest first: defaults, config file, environment (.env is
    loaded into the environment first). An explicit path must exist; the
    default config.json is optional.
    """
    load_dotenv()
    config = AppConfig()

    config_path = Path(path or os.getenv('FLIGHT_STATS_CONFIG') or DEFAULT_CONFIG_PATH)
    if config_path.exists() or path is not None:
        data = _load_file(config_path)
        senders = data.get('flight_emails', data.get('flightEmails', []))
        if isinstance(senders, str):
            senders = [senders]
        try:
            config = replace(
                config,
                flight_emails=[str(sender) for sender in senders],
                max_results=int(data.get('max_results', config.max_results)),
                output_path=str(data.get('output_path', config.output_path)),
                timeout=float(data.get('timeout', config.timeout)),
                max_workers=int(data.get('max_workers', config.max_workers)),
                credentials_path=str(data.get('credentials_path', config.credentials_path)),
                token_path=str(data.get('token_path', config.token_path)),
                debug=_as_flag(data.get('debug', config.debug)),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid value in {config_path}: {e}") from e
        logger.debug(f"Loaded config from {config_path}")

    senders = os.getenv('FLIGHT_STATS_SENDERS')
    if senders:
        config.flight_emails = [s.strip() for s in senders.split(',') if s.strip()]

    output_path = os.getenv('FLIGHT_STATS_OUTPUT')
    if output_path:
        config.output_path = output_path

    timeout = _env_number('FLIGHT_STATS_TIMEOUT', float)
    if timeout is not None:
        config.timeout = timeout

    max_workers = _env_number('FLIGHT_STATS_MAX_WORKERS', int)
    if max_workers is not None:
        config.max_workers = max_workers

    debug = _env_flag('FLIGHT_STATS_DEBUG')
    if debug is not None:
        config.debug = debug

    return config
