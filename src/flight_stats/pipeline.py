"""
# src/flight_stats/pipeline.py
# Stage functions from mailbox search to flight summary

Stages run one after the other; the message fetch and the code resolution
fan out concurrently and join before the next stage starts. Each stage
returns fresh values instead of mutating shared state.
"""

from dataclasses import dataclass
from typing import Dict, List, Sequence

from .auth.gmail_client import GmailClient, build_sender_query
from .bookings import build_frequency_map, scan_message
from .errors import ExtractionError, MailboxError
from .flight_list import build_flight_list
from .models import BookingScan, ExtractionFailed, FlightFrequencyMap, FlightInfo, FlightList, StatsSummary
from .resolver import FlightInfoResolver
from .stats import summarize
from .utils.concurrency import run_batch
from .utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class PipelineResult:
    scans: List[BookingScan]
    frequency_map: FlightFrequencyMap
    infos: Dict[str, FlightInfo]
    flights: FlightList
    summary: StatsSummary


def find_booking_messages(client: GmailClient, senders: Sequence[str], max_results: int = 300) -> List[str]:
    """Ids of the messages sent by any of the booking senders."""
    return client.search_messages(build_sender_query(senders), max_results=max_results)


def _fetch_and_scan(client: GmailClient, message_id: str):
    try:
        body = client.get_message_body(message_id)
    except ExtractionError as e:
        return ExtractionFailed(message_id=message_id, reason=str(e))
    if body is None:
        logger.debug(f"Message {message_id} has no readable body, skipping")
        return None
    return scan_message(message_id, body)


def scan_messages(
    client: GmailClient,
    message_ids: Sequence[str],
    max_workers: int = 10,
    show_progress: bool = True,
) -> List[BookingScan]:
    """
    Fetch every message concurrently and extract its booking tokens.

    Scans come back in message_ids order. Messages without a readable body
    are left out.

    Raises:
        MailboxError: if any message could not be fetched; no partial result
    """
    outcomes = run_batch(
        lambda message_id: _fetch_and_scan(client, message_id),
        message_ids,
        max_workers=max_workers,
        desc='Retrieving flight codes',
        show_progress=show_progress,
    )

    failed = [outcome for outcome in outcomes if not outcome.ok]
    if failed:
        first = failed[0]
        if isinstance(first.error, MailboxError):
            raise first.error
        raise MailboxError(f"Fetching message {first.item} failed: {first.error}") from first.error

    scans = [outcome.value for outcome in outcomes if outcome.value is not None]
    extraction_failures = sum(isinstance(scan, ExtractionFailed) for scan in scans)
    if extraction_failures:
        logger.debug(f"{extraction_failures} messages could not be scanned")
    return scans


def run_pipeline(
    client: GmailClient,
    resolver: FlightInfoResolver,
    senders: Sequence[str],
    max_results: int = 300,
    max_workers: int = 10,
    show_progress: bool = True,
) -> PipelineResult:
    """
    Search, scan, resolve and summarize the booking messages.

    Raises:
        MailboxError: when the mailbox cannot be searched or read
    """
    message_ids = find_booking_messages(client, senders, max_results=max_results)
    scans = scan_messages(client, message_ids, max_workers=max_workers, show_progress=show_progress)

    frequency_map = build_frequency_map(scans)
    logger.info(f"Found {len(frequency_map)} distinct flight codes in {len(scans)} messages")

    infos, frequency_map = resolver.resolve_all(frequency_map)

    logger.info("Gathering stats...")
    flights = build_flight_list(scans, frequency_map, infos)
    summary = summarize(flights)

    return PipelineResult(
        scans=scans,
        frequency_map=frequency_map,
        infos=infos,
        flights=flights,
        summary=summary,
    )
