"""Command-line interface for the xmlstats ingestion client.

Fetches one document from the xmlstats API (the events for a date, or a
team roster), decodes it into typed records and prints it to stdout.
Connection settings come from XMLSTATS_URL, XMLSTATS_BEARERTOKEN and
XMLSTATS_USERAGENT.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date, datetime, timezone
from typing import Any, Callable

from .ingest import (
    fetch_events,
    fetch_roster,
)
from .transform import (
    events_frame,
    roster_frame,
)

logger = logging.getLogger(__name__)


DEFAULT_DATE = "2013-01-31"
DEFAULT_SPORT = "nba"


def parse_date_safe(date_str: str, field_name: str) -> date:
    """Parse date string with proper error handling."""
    try:
        return date.fromisoformat(date_str)
    except ValueError as e:
        raise ValueError(
            f"Invalid {field_name} format '{date_str}'. Use YYYY-MM-DD format."
        ) from e


def render(record: Any, to_frame: Callable[[Any], Any], output_format: str) -> str:
    """Render a decoded record as a table or as JSON.

    The DataFrame is only built for table output.
    """
    if output_format == "json":
        return record.model_dump_json(by_alias=True, indent=2)
    frame = to_frame(record)
    if frame.empty:
        return "(no rows)"
    return frame.to_string(index=False)


def main() -> None:
    """Main entry point with command-line interface for xmlstats fetches."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
    )

    parser = argparse.ArgumentParser(
        description="Fetch sports events and rosters from the xmlstats API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Events for the default date (2013-01-31)
  python main.py --events

  # NHL events for a specific date
  python main.py --events --date 2013-01-31 --sport nhl

  # Current roster of a team, as JSON
  python main.py --roster memphis-grizzlies --format json
        """,
    )

    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument(
        "--events",
        action="store_true",
        help="Fetch the events for --date and --sport",
    )
    group.add_argument(
        "--roster",
        type=str,
        metavar="TEAM_ID",
        help="Fetch the current roster of a team (e.g. memphis-grizzlies)",
    )

    parser.add_argument(
        "--date",
        type=str,
        default=DEFAULT_DATE,
        help=f"Event date in YYYY-MM-DD format (default: {DEFAULT_DATE})",
    )
    parser.add_argument(
        "--sport",
        type=str,
        default=DEFAULT_SPORT,
        help=f"xmlstats sport code (default: {DEFAULT_SPORT})",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["table", "json"],
        default="table",
        help="Output format (default: table)",
    )

    args = parser.parse_args()

    # Captured once; every record from this run carries the same extraction time
    extracted_at = datetime.now(timezone.utc)

    if args.events:
        operation = "events"
        event_date = parse_date_safe(args.date, "date")
    else:
        operation = "roster"

    logger.info(f"Starting {operation} fetch | Sport: {args.sport}")
    try:
        if args.events:
            events = fetch_events(event_date, args.sport, extracted_at=extracted_at)
            output = render(events, events_frame, args.format)
        else:
            roster = fetch_roster(args.sport, args.roster, extracted_at=extracted_at)
            output = render(roster, roster_frame, args.format)
    except Exception as e:
        logger.error(f"{operation} fetch failed: {e}")
        raise

    print(output)
    logger.info("Terminating the application...")

