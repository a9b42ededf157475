"""Show the timetable for the next school day as JSON or table.

Standalone CLI script for the beste.schule journal API.
Resolves the requested date (skipping over holidays), merges the lessons
into an hour x class grid and prints it.

Run with: python scripts/show_timetable.py
Table:    python scripts/show_timetable.py --table
Date:     python scripts/show_timetable.py --date 2024-12-23
Watch:    python scripts/show_timetable.py --table --watch

The API token is read from TIMETABLE_API_TOKEN (or .env), or --token.

Exit codes:
  0 = success (JSON or table on stdout)
  1 = error (message on stderr)
"""

import argparse
import json
import os
import sys
import time
from datetime import date, datetime

from dotenv import load_dotenv

load_dotenv()

# Add project root to path for src imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.timetable.config import get_config  # noqa: E402
from src.timetable.dates import next_valid_date  # noqa: E402
from src.timetable.errors import AuthenticationError, TimetableError  # noqa: E402
from src.timetable.grid import format_table, merge  # noqa: E402
from src.timetable.logging import get_logger, setup_logging  # noqa: E402
from src.timetable.models import DisplayGrid  # noqa: E402
from src.timetable.search import get_timetable  # noqa: E402

log = get_logger(__name__)


def _parse_args() -> argparse.Namespace:
    """Parse CLI arguments using argparse."""
    parser = argparse.ArgumentParser(
        description="Show the timetable for the next school day.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--token",
        type=str,
        default=None,
        help="API token (default: TIMETABLE_API_TOKEN).",
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Date to resolve as YYYY-MM-DD (default: next valid school date).",
    )
    parser.add_argument(
        "--table",
        action="store_true",
        help="Output a human-readable table instead of JSON.",
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Refresh periodically until a holiday countdown is shown.",
    )
    return parser.parse_args()


def _load_grid(token: str, requested: date | None) -> DisplayGrid:
    config = get_config()
    now = datetime.now()
    day = requested or next_valid_date(now, config.day_cutoff_hour)

    log.info("timetable_requested", date=day.isoformat())
    resolved = get_timetable(token, day, config=config)
    return merge(
        resolved,
        today=now.date(),
        now=now,
        show_countdown_days=config.show_countdown_days,
    )


def _print_grid(grid: DisplayGrid, table_output: bool) -> None:
    if table_output:
        print(format_table(grid))
    else:
        print(json.dumps(grid.model_dump(mode="json", by_alias=True), indent=2))


def main(args: argparse.Namespace) -> None:
    config = get_config()
    setup_logging(json_output=config.log_json, log_level=config.log_level)

    token = args.token or config.api_token
    if not token:
        raise AuthenticationError("No API token - set TIMETABLE_API_TOKEN or pass --token")

    while True:
        grid = _load_grid(token, args.date)
        _print_grid(grid, args.table)

        # Nothing changes during holidays; stop refreshing
        if not args.watch or grid.holiday_mode:
            break
        time.sleep(config.refresh_interval_seconds)


if __name__ == "__main__":
    args = _parse_args()
    try:
        main(args)
    except TimetableError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(1)
