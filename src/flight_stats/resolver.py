"""
# src/flight_stats/resolver.py
# Turns flight codes into FlightInfo using a tracking source
"""

import re
from dataclasses import dataclass
from typing import Dict, Optional, Pattern, Protocol, Tuple, Union

from .bookings import prune_frequency_map
from .errors import ResolutionError
from .models import FlightFrequencyMap, FlightInfo
from .tracking.flightaware import parse_tracking_page
from .utils.concurrency import run_batch
from .utils.logger import get_logger

logger = get_logger(__name__)

DISTANCE_TOKEN = re.compile(r'\d*,?\d+')
DURATION_TOKEN = re.compile(r'\d+')


class TrackingSource(Protocol):
    def fetch_tracking_page(self, flight_code: str) -> str:
        ...


@dataclass(frozen=True)
class NoValue:
    pass


@dataclass(frozen=True)
class OneValue:
    value: str


@dataclass(frozen=True)
class TwoValues:
    first: str
    second: str


NumericTokens = Union[NoValue, OneValue, TwoValues]


def tokenize(text: str, pattern: Pattern) -> NumericTokens:
    """Classify the numeric tokens of a field by how many there are.

    Fields never carry more than two meaningful numbers; anything beyond the
    second token is ignored.
    """
    tokens = pattern.findall(text or '')
    if not tokens:
        return NoValue()
    if len(tokens) == 1:
        return OneValue(tokens[0])
    return TwoValues(tokens[0], tokens[1])


def _to_int(token: str) -> int:
    return int(token.replace(',', ''))


def distance_from_tokens(tokens: NumericTokens) -> Optional[int]:
    """Miles; with two numbers the second one (direct distance) wins."""
    if isinstance(tokens, TwoValues):
        return _to_int(tokens.second)
    if isinstance(tokens, OneValue):
        return _to_int(tokens.value)
    return None


def duration_from_tokens(tokens: NumericTokens) -> int:
    """Minutes; two numbers are hours and minutes, one number is minutes."""
    if isinstance(tokens, TwoValues):
        return int(tokens.first) * 60 + int(tokens.second)
    if isinstance(tokens, OneValue):
        return int(tokens.value)
    return 0


def parse_distance(text: str) -> Optional[int]:
    return distance_from_tokens(tokenize(text, DISTANCE_TOKEN))


def parse_duration(text: str) -> int:
    return duration_from_tokens(tokenize(text, DURATION_TOKEN))


class FlightInfoResolver:
    """Resolves flight codes against a tracking source.

    A code resolves only when its tracking page has a numeric duration;
    anything else (HTTP errors, timeouts, missing fields) marks the code as
    invalid.
    """

    def __init__(self, source: TrackingSource, max_workers: int = 10, show_progress: bool = True):
        self.source = source
        self.max_workers = max_workers
        self.show_progress = show_progress

    def _fetch_info(self, code: str) -> FlightInfo:
        markup = self.source.fetch_tracking_page(code)
        page = parse_tracking_page(markup)

        duration_tokens = tokenize(page.duration_text, DURATION_TOKEN)
        if isinstance(duration_tokens, NoValue):
            raise ResolutionError(code, "no duration on tracking page")

        return FlightInfo(
            code=code,
            origin=page.origin,
            destination=page.destination,
            distance_miles=parse_distance(page.distance_text),
            duration_minutes=duration_from_tokens(duration_tokens),
        )

    def resolve(self, code: str) -> Optional[FlightInfo]:
        """FlightInfo for the code, or None when it cannot be resolved.

        Every failure counts: rejected pages, network errors and unexpected
        markup all mark the code as invalid.
        """
        try:
            return self._fetch_info(code)
        except ResolutionError as e:
            logger.debug(f"Invalid flight code: {e}")
        except Exception as e:
            logger.debug(f"Resolving {code} failed: {type(e).__name__}: {e}", exc_info=True)
        return None

    def resolve_all(self, frequency_map: FlightFrequencyMap) -> Tuple[Dict[str, FlightInfo], FlightFrequencyMap]:
        """
        Resolve every code of the frequency map concurrently.

        Returns:
            (infos for the codes that resolved, frequency map without the
            codes that did not)
        """
        codes = list(frequency_map)
        outcomes = run_batch(
            self.resolve,
            codes,
            max_workers=self.max_workers,
            desc='Retrieving flight info',
            show_progress=self.show_progress,
        )

        infos: Dict[str, FlightInfo] = {}
        invalid = []
        for outcome in outcomes:
            if outcome.value is not None:
                infos[outcome.item] = outcome.value
            else:
                invalid.append(outcome.item)

        logger.info(f"Resolved {len(infos)} of {len(codes)} flight codes")
        return infos, prune_frequency_map(frequency_map, invalid)
