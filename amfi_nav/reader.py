"""
Streaming NAV record reader.

This module ties the line classifier and line grammars into a stateful,
pull-based iterator over a feed, and provides the entry points that open a
feed from the AMFI portal, any mirror URL, a local file, or lines already
in memory.

Items yielded by the iterator are either NavRecord instances or NavError
instances; errors inside a session are yielded, not raised:

    for item in nav_from_file("NAVOpen.txt"):
        if isinstance(item, NavError):
            logger.warning(item)
        else:
            print(item.nav, item.date, item.name)
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

import requests

from amfi_nav.exceptions import (
    HttpStatusError,
    NavError,
    NavIOError,
    NavRequestError,
    RecordParseError,
)
from amfi_nav.line_parsers import classify_line, parse_record, parse_scheme
from amfi_nav.models import LineType, NavRecord, ParseContext

logger = logging.getLogger(__name__)

# AMFI portal endpoint with the latest NAV of every scheme
BASE_URL = "http://portal.amfiindia.com/spages/NAVAll.txt"

DEFAULT_TIMEOUT = 30
ENCODING = "utf-8"

Line = Union[str, bytes]
NavItem = Union[NavRecord, NavError]


class NavRecordIterator:
    """
    Iterator over the records of one NAV feed.

    Each call to next() reads as many lines as needed to produce one item:
    header and blank lines are skipped, AMC and section lines update the
    parse context, and a data line produces a record or an error. A
    section line that fails to parse ends the session after its error is
    yielded.

    Attributes:
        context: Context inherited by data lines
        line_number: Number of lines read so far
        records: Number of records yielded
        errors: Number of errors yielded
    """

    def __init__(self, lines: Iterable[Line], close: Optional[Callable[[], None]] = None):
        """
        Initialize the iterator.

        Args:
            lines: Source of raw feed lines, as bytes or str.
            close: Optional callable releasing the source.
        """
        self._lines = iter(lines)
        self._close = close
        self.context = ParseContext()
        self.bailout = False
        self._finished = False
        self.line_number = 0
        self.records = 0
        self.errors = 0

    def __iter__(self) -> "NavRecordIterator":
        return self

    def __next__(self) -> NavItem:
        while not self.bailout:
            try:
                raw = next(self._lines)
            except StopIteration:
                break
            # RequestException subclasses OSError; keep it first.
            except requests.RequestException as e:
                return self._error(NavRequestError(e))
            except OSError as e:
                return self._error(NavIOError(e))

            self.line_number += 1
            item = self._process(self._decode(raw))
            if item is not None:
                return item

        if not self._finished:
            self._finished = True
            logger.info(
                f"NAV feed finished after {self.line_number} lines: "
                f"{self.records} records, {self.errors} errors"
            )
        raise StopIteration

    def _decode(self, raw: Line) -> str:
        if isinstance(raw, bytes):
            raw = raw.decode(ENCODING, errors="replace")
        return raw.rstrip("\r\n")

    def _process(self, line: str) -> Optional[NavItem]:
        """Fold one line into the context; return an item if one is ready."""
        line_type = classify_line(line)

        if line_type == LineType.RECORD:
            record_line = line.strip()
            try:
                builder = parse_record(record_line)
                record = builder.context(self.context).build()
            except NavError as e:
                return self._error(e)
            self.records += 1
            return record

        if line_type == LineType.SCHEME:
            try:
                maturity, scheme, category = parse_scheme(line.strip())
            except RecordParseError as e:
                self.bailout = True
                logger.error(f"Stopping at line {self.line_number}, bad section header")
                return self._error(e)
            self.context.update_scheme(maturity, scheme, category)
            logger.debug(f"Section at line {self.line_number}: {scheme} / {category}")

        elif line_type == LineType.AMC:
            self.context.amc = line.strip()
            logger.debug(f"AMC at line {self.line_number}: {self.context.amc}")

        return None

    def _error(self, error: NavError) -> NavError:
        self.errors += 1
        logger.warning(f"Line {self.line_number}: {error}")
        return error

    def close(self) -> None:
        """Release the underlying line source."""
        if self._close is not None:
            self._close()
            self._close = None

    def __enter__(self) -> "NavRecordIterator":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


def daily_nav(timeout: float = DEFAULT_TIMEOUT) -> NavRecordIterator:
    """
    Parse the latest NAV data from the AMFI portal.

    This is the main entry point for programmatic use.
    """
    return nav_from_url(BASE_URL, timeout=timeout)


def nav_from_url(url: str, timeout: float = DEFAULT_TIMEOUT) -> NavRecordIterator:
    """
    Parse NAV data from any mirror serving the AMFI feed format.

    Args:
        url: Address of the feed.
        timeout: Connect and read timeout in seconds.

    Returns:
        NavRecordIterator streaming the response body.

    Raises:
        NavRequestError: If the request could not be made.
        HttpStatusError: If the server did not answer with a 2xx status.
    """
    logger.info(f"Fetching NAV feed: {url}")
    try:
        response = requests.get(url, stream=True, timeout=timeout)
    except requests.RequestException as e:
        logger.error(f"Failed to fetch NAV data: {e}")
        raise NavRequestError(e) from e

    if not 200 <= response.status_code < 300:
        response.close()
        logger.error(f"NAV feed returned HTTP {response.status_code}")
        raise HttpStatusError(response.status_code, response.reason)

    return NavRecordIterator(response.iter_lines(), close=response.close)


def nav_from_file(path: Union[str, Path]) -> NavRecordIterator:
    """
    Parse NAV data from a local copy in the AMFI feed format.

    Raises:
        NavIOError: If the file cannot be opened.
    """
    logger.info(f"Reading NAV feed: {path}")
    try:
        handle = open(path, "rb")
    except OSError as e:
        raise NavIOError(e) from e
    return NavRecordIterator(handle, close=handle.close)


def nav_from_lines(lines: Iterable[Line]) -> NavRecordIterator:
    """Parse NAV data from lines already in memory."""
    return NavRecordIterator(lines)
