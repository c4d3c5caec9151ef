"""
# src/flight_stats/flight_list.py
# Joins per-message bookings with resolved flight info
"""

from typing import Dict, Iterable, List

from .bookings import unique_in_order
from .models import BookingScan, FlightFrequencyMap, FlightInfo, FlightList, FlightRecord, MessageBooking
from .utils.logger import get_logger

logger = get_logger(__name__)


def retained_bookings(scans: Iterable[BookingScan], frequency_map: FlightFrequencyMap) -> List[MessageBooking]:
    """Bookings with codes, each restricted to codes still in the frequency map."""
    bookings = []
    for scan in scans:
        if not isinstance(scan, MessageBooking) or not scan.codes:
            continue
        bookings.append(MessageBooking(
            message_id=scan.message_id,
            dates=scan.dates,
            codes=tuple(code for code in scan.codes if code in frequency_map),
        ))
    return bookings


def build_flight_list(
    scans: Iterable[BookingScan],
    frequency_map: FlightFrequencyMap,
    infos: Dict[str, FlightInfo],
) -> FlightList:
    """
    Build the de-duplicated list of enriched flights.

    Dates and codes of a message are paired by position; whichever sequence
    is longer loses its extra entries. The two are extracted independently,
    so a message listing several bookings out of order can be mispaired.
    """
    flights = []
    for booking in retained_bookings(scans, frequency_map):
        logger.debug(f"Booking {booking.message_id}: dates={booking.dates} codes={booking.codes}")
        for date, code in zip(booking.dates, booking.codes):
            info = infos.get(code)
            if info is None:
                continue
            flights.append(FlightRecord.from_info(date, info))

    return unique_in_order(flights)
