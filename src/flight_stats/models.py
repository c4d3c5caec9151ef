"""
# src/flight_stats/models.py
# Data model shared by the pipeline stages
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

EXPORT_HEADERS = ['Date', 'Flight Code', 'From', 'To', 'Distance', 'Duration']


@dataclass(frozen=True)
class MessageBooking:
    """Dates and flight codes found in one message.

    Position i in dates is presumed, not guaranteed, to belong to position i
    in codes.
    """
    message_id: str
    dates: Tuple[str, ...]
    codes: Tuple[str, ...]


@dataclass(frozen=True)
class ExtractionFailed:
    """Marker for a message whose body could not be scanned."""
    message_id: str
    reason: str


BookingScan = Union[MessageBooking, ExtractionFailed]

# flight code -> number of messages mentioning it
FlightFrequencyMap = Dict[str, int]


@dataclass(frozen=True)
class FlightInfo:
    code: str
    origin: str
    destination: str
    distance_miles: Optional[int]
    duration_minutes: int


@dataclass(frozen=True)
class FlightRecord:
    date: str
    code: str
    distance_miles: Optional[int]
    duration_minutes: int
    origin: str
    destination: str

    @classmethod
    def from_info(cls, date: str, info: FlightInfo) -> 'FlightRecord':
        return cls(
            date=date,
            code=info.code,
            distance_miles=info.distance_miles,
            duration_minutes=info.duration_minutes,
            origin=info.origin,
            destination=info.destination,
        )

    def to_row(self) -> Dict:
        """Export row keyed by the CSV header names."""
        return {
            'Date': self.date,
            'Flight Code': self.code,
            'From': self.origin,
            'To': self.destination,
            'Distance': self.distance_miles,
            'Duration': self.duration_minutes,
        }


FlightList = List[FlightRecord]


@dataclass(frozen=True)
class StatsSummary:
    total_flights: int
    total_distance_miles: int
    total_duration_minutes: int
