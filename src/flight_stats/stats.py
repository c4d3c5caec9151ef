"""
# src/flight_stats/stats.py
# Aggregate totals over the flight list
"""

from typing import Iterable

from .models import FlightRecord, StatsSummary


def summarize(flights: Iterable[FlightRecord]) -> StatsSummary:
    """Count every flight, but only sum distance and time of flights with a known distance."""
    total_flights = 0
    total_distance = 0
    total_time = 0

    for flight in flights:
        total_flights += 1
        if flight.distance_miles is not None:
            total_distance += flight.distance_miles
            total_time += flight.duration_minutes

    return StatsSummary(
        total_flights=total_flights,
        total_distance_miles=total_distance,
        total_duration_minutes=total_time,
    )


def format_summary(summary: StatsSummary) -> str:
    """Format the totals for display"""
    return f"""Results:
    Total Flights: {summary.total_flights}
    Total Time: {summary.total_duration_minutes} minutes
    Total Distance: {summary.total_distance_miles} miles"""
