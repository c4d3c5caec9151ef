"""
# src/flight_stats/parsers/booking_parser.py
# Lexical extraction of flight codes and dates from booking emails
"""

import re
from typing import List, Tuple

from ..errors import ExtractionError
from ..utils.logger import get_logger

logger = get_logger(__name__)

# Airline designator (AA, B6, 9W, optionally a third letter) followed directly
# by 1-4 digits and an optional suffix letter. Leading whitespace is optional,
# so a date written without spaces ("5Jan24") also yields a candidate ("Jan24");
# such candidates never resolve and are pruned with the other invalid codes.
FLIGHT_CODE_PATTERN = re.compile(
    r'\s*(?:[a-z][a-z]|[a-z][0-9]|[0-9][a-z])[a-z]?[0-9]{1,4}[a-z]?',
    re.IGNORECASE,
)

# 5 Jan 24, 10-Feb-2024, 3Okt2019 ...
DATE_PATTERN = re.compile(
    r'[0-3]?[0-9][\s-]?'
    r'(?:Jan|Feb|M[aä]r|Apr|Ma[yi]|Jun|Jul|Aug|Sep|O[ck]t|Nov|De[cz])'
    r'[\s-]?(?:19|20)?[0-9]{2}',
    re.IGNORECASE,
)


def _check_text(text) -> str:
    if not isinstance(text, str):
        raise ExtractionError(f"Expected message text, got {type(text).__name__}")
    return text


def extract_flight_codes(text: str) -> List[str]:
    """All flight-code-like matches, in order and in their original casing."""
    return [match.group(0) for match in FLIGHT_CODE_PATTERN.finditer(_check_text(text))]


def extract_dates(text: str) -> List[str]:
    """All date-like matches, in order and in their original casing."""
    return [match.group(0) for match in DATE_PATTERN.finditer(_check_text(text))]


def extract_booking_tokens(text: str) -> Tuple[List[str], List[str]]:
    """
    Scan a message body for dates and flight codes.

    No validation happens here; a code is only trusted once it resolves.

    Returns:
        (dates, codes), both possibly empty

    Raises:
        ExtractionError: when the body is not text
    """
    dates = extract_dates(text)
    codes = extract_flight_codes(text)
    logger.debug(f"Found {len(dates)} dates and {len(codes)} flight codes")
    return dates, codes
