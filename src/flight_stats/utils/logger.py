"""
# src/flight_stats/utils/logger.py
# Package-wide logging setup
"""

import logging
import os
from datetime import datetime

ROOT_LOGGER_NAME = 'flight_stats'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if root.handlers:
        return root

    root.setLevel(logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    # File handler
    log_dir = os.getenv('FLIGHT_STATS_LOG_DIR', 'logs')
    try:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(
            os.path.join(log_dir, f'app_{datetime.now().strftime("%Y%m%d")}.log'),
            encoding='utf-8',
        )
    except OSError as e:
        root.warning(f"File logging disabled, cannot write to {log_dir}: {e}")
    else:
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    return root


def get_logger(name: str) -> logging.Logger:
    """Return a logger that reports through the package handlers."""
    _configure_root()
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')


def set_verbose(verbose: bool) -> None:
    """Switch every package handler between INFO and DEBUG."""
    level = logging.DEBUG if verbose else logging.INFO
    root = _configure_root()
    root.setLevel(level)
    for handler in root.handlers:
        handler.setLevel(level)
