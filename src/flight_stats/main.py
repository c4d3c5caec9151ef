"""
# src/flight_stats/main.py
# Main entry point for Gmail Flight Stats
"""

import argparse
import sys
import webbrowser
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .auth.gmail_client import GmailClient
from .auth.google_auth import load_credentials
from .config import AppConfig, load_config
from .errors import FlightStatsError
from .exporters.csv_exporter import CSVExporter
from .pipeline import run_pipeline
from .resolver import FlightInfoResolver
from .stats import format_summary
from .tracking.flightaware import FlightAwareClient
from .utils.error_handler import handle_errors
from .utils.logger import get_logger, set_verbose

logger = get_logger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Gmail Flight Stats')
    parser.add_argument('--config', type=str, default=None,
                      help='Path to the JSON config file (default: config.json if present)')
    parser.add_argument('--sender', action='append', dest='senders', default=None,
                      help='Booking sender address to search for (repeatable, overrides config)')
    parser.add_argument('--max-results', type=int, default=None,
                      help='Maximum number of messages to scan (default: 300)')
    parser.add_argument('--output', type=str, default=None,
                      help='CSV output path (default: out/flightdata.csv)')
    parser.add_argument('--timeout', type=float, default=None,
                      help='Per-request timeout in seconds (default: 30)')
    parser.add_argument('--workers', type=int, default=None,
                      help='Concurrent requests per batch (default: 10)')
    parser.add_argument('--verbose', action='store_true',
                      help='Log dropped flight codes and intermediate booking data')
    open_group = parser.add_mutually_exclusive_group()
    open_group.add_argument('--open', action='store_true',
                      help='Open the CSV when done without asking')
    open_group.add_argument('--no-prompt', action='store_true',
                      help='Never ask to open the CSV')
    return parser


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    overrides = {}
    if args.senders:
        overrides['flight_emails'] = args.senders
    if args.max_results is not None:
        overrides['max_results'] = args.max_results
    if args.output:
        overrides['output_path'] = args.output
    if args.timeout is not None:
        overrides['timeout'] = args.timeout
    if args.workers is not None:
        overrides['max_workers'] = args.workers
    if args.verbose:
        overrides['debug'] = True
    return replace(config, **overrides)


def confirm_open(always_open: bool = False, never_ask: bool = False) -> bool:
    if always_open:
        return True
    if never_ask or not sys.stdin.isatty():
        return False
    response = input("\nDo you want to open the CSV? [y/N]: ").strip().lower()
    return response in {"y", "yes"}


@handle_errors
def run(config: AppConfig, always_open: bool = False, never_ask: bool = False) -> Path:
    logger.info(f"Searching for flight emails from {len(config.flight_emails)} senders...")
    credentials = load_credentials(config.credentials_path, config.token_path)
    client = GmailClient.from_credentials(credentials, timeout=config.timeout)
    resolver = FlightInfoResolver(
        FlightAwareClient(timeout=config.timeout),
        max_workers=config.max_workers,
    )

    result = run_pipeline(
        client,
        resolver,
        config.flight_emails,
        max_results=config.max_results,
        max_workers=config.max_workers,
    )
    print(format_summary(result.summary))

    output_path = CSVExporter(config.output_path).export(result.flights)
    print(f"File saved! {output_path.resolve()}")

    if confirm_open(always_open, never_ask):
        webbrowser.open(output_path.resolve().as_uri())
    return output_path


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    try:
        config = apply_overrides(load_config(args.config), args).validate()
        set_verbose(config.debug)
        run(config, always_open=args.open, never_ask=args.no_prompt)
    except FlightStatsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        return 130
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
