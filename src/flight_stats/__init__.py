"""Flight booking statistics from a Gmail mailbox."""

__version__ = "0.1.0"
