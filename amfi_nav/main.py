"""
Command line interface for the AMFI NAV parser.

Parses a local feed copy or a feed URL and prints one line per record,
either as a fixed-width text row or as JSON.
"""

import argparse
import json
import logging
import os
import sys
from typing import Optional, TextIO

from amfi_nav.exceptions import NavError
from amfi_nav.reader import (
    BASE_URL,
    DEFAULT_TIMEOUT,
    NavRecordIterator,
    nav_from_file,
    nav_from_url,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

URL_ENV_VAR = "AMFI_NAV_URL"


def print_records(
    items: NavRecordIterator,
    as_json: bool = False,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> tuple:
    """
    Print every record of a session and report errors.

    Args:
        items: Open parse session.
        as_json: Print records as JSON lines instead of text rows.
        out: Stream for records and the summary (default: stdout).
        err: Stream for errors (default: stderr).

    Returns:
        Tuple of (record count, error count).
    """
    out = out or sys.stdout
    err = err or sys.stderr
    count = 0
    errors = 0

    with items:
        for item in items:
            if isinstance(item, NavError):
                errors += 1
                print(item, file=err)
                continue
            count += 1
            if as_json:
                print(json.dumps(item.to_dict(), ensure_ascii=False), file=out)
            else:
                print(f"{item.nav:>10.4f}  {item.date}  {item.name}", file=out)

    print(f"Total: {count} Error: {errors}", file=out)
    return count, errors


def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Parse AMFI daily NAV data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s NAVOpen.txt
  %(prog)s --online --json
  %(prog)s --url http://localhost:8000/NAVAll.txt
        """,
    )
    parser.add_argument(
        "nav_file",
        nargs="?",
        help="Path to a local NAV feed file",
    )
    parser.add_argument(
        "--url",
        help="Fetch the feed from this URL",
    )
    parser.add_argument(
        "--online",
        action="store_true",
        help=f"Fetch the feed from ${URL_ENV_VAR} or the AMFI portal",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Network timeout in seconds",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print records as JSON lines",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress all logging except errors",
    )

    args = parser.parse_args(argv)

    # Configure logging level
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    elif args.quiet:
        logging.getLogger().setLevel(logging.ERROR)

    url = args.url
    if args.online and not url:
        url = os.environ.get(URL_ENV_VAR, BASE_URL)

    if not url and not args.nav_file:
        parser.error("a NAV file, --url or --online is required")

    try:
        if url:
            items = nav_from_url(url, timeout=args.timeout)
        else:
            items = nav_from_file(args.nav_file)
    except NavError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print_records(items, as_json=args.json)


if __name__ == "__main__":
    main()
