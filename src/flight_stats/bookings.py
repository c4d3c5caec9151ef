"""
# src/flight_stats/bookings.py
# Per-message booking records and the cross-message flight frequency map
"""

import re
from typing import Iterable, List, Optional, Sequence, TypeVar

from .errors import ExtractionError
from .models import BookingScan, ExtractionFailed, FlightFrequencyMap, MessageBooking
from .parsers.booking_parser import extract_booking_tokens
from .utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar('T')

_DATE_SEPARATORS = re.compile(r'[\s-]+')


def unique_in_order(values: Iterable[T]) -> List[T]:
    """Drop repeated values, keeping the first occurrence of each."""
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


def normalize_date(raw: str) -> str:
    """'10-Feb-2024' -> '10Feb2024', ' 5 Jan 24' -> '5Jan24'"""
    return _DATE_SEPARATORS.sub('', raw)


def record_message(message_id: str, codes: Sequence[str], dates: Sequence[str]) -> MessageBooking:
    """Freeze one message's matches into a MessageBooking.

    Codes are trimmed and dates normalized before each sequence is
    de-duplicated on its own.
    """
    return MessageBooking(
        message_id=message_id,
        dates=tuple(unique_in_order(normalize_date(d) for d in dates)),
        codes=tuple(unique_in_order(c.strip() for c in codes)),
    )


def scan_message(message_id: str, body: Optional[str]) -> BookingScan:
    """Extract a MessageBooking from a body, or mark the message as failed."""
    try:
        dates, codes = extract_booking_tokens(body)
    except ExtractionError as e:
        logger.debug(f"Extraction failed for message {message_id}: {e}")
        return ExtractionFailed(message_id=message_id, reason=str(e))
    return record_message(message_id, codes, dates)


def build_frequency_map(scans: Iterable[BookingScan]) -> FlightFrequencyMap:
    """Count in how many messages each distinct flight code appears.

    Failed scans and messages without codes are skipped.
    """
    frequency_map: FlightFrequencyMap = {}
    for scan in scans:
        if not isinstance(scan, MessageBooking) or not scan.codes:
            continue
        for code in scan.codes:
            frequency_map[code] = frequency_map.get(code, 0) + 1

    logger.debug(f"Flight frequency map: {frequency_map}")
    return frequency_map


def prune_frequency_map(frequency_map: FlightFrequencyMap, invalid_codes: Iterable[str]) -> FlightFrequencyMap:
    """Return a copy of the map without the given codes."""
    invalid = set(invalid_codes)
    return {code: count for code, count in frequency_map.items() if code not in invalid}
