"""
# src/flight_stats/errors.py
# Error taxonomy for the flight stats pipeline
"""


class FlightStatsError(Exception):
    """Base class for every error raised by the pipeline."""


class ConfigError(FlightStatsError):
    """Configuration is missing or malformed."""


class MailboxError(FlightStatsError):
    """Searching or fetching the mailbox failed. Fatal for the run."""


class ExtractionError(FlightStatsError):
    """A message body could not be decoded or scanned. Never fatal."""


class ResolutionError(FlightStatsError):
    """A flight code could not be turned into flight info. Never fatal."""

    def __init__(self, code: str, reason: str):
        super().__init__(f"{code}: {reason}")
        self.code = code
        self.reason = reason


class ExportError(FlightStatsError):
    """Writing the export file failed. Fatal for the run."""
