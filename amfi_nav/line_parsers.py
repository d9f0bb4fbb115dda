"""
Line-level grammars for the AMFI NAV feed.

This module classifies raw feed lines and parses the two structured line
kinds: semicolon-delimited data lines and "... Ended Scheme(...)" section
headers. Both grammars are fixed sequences of field lexers; a failure in
any field rejects the whole line with a RecordParseError.
"""

import logging
from typing import Optional, Tuple

from amfi_nav import lexers
from amfi_nav.exceptions import LexError, RecordParseError
from amfi_nav.lexers import Cursor
from amfi_nav.models import FundMaturity, FundPlan, LineType, NavRecordBuilder

logger = logging.getLogger(__name__)

HEADER_PREFIX = "Scheme"
RECORD_DELIMITER = ";"
SCHEME_MARKER = "Ended Scheme"

# Placeholders used by AMFI for a missing ISIN. Longest first.
ISIN_PLACEHOLDERS = ("---", "-")


def classify_line(line: str) -> LineType:
    """
    Classify a feed line by structural cues.

    Order matters: the table header starts with "Scheme Code;..." and would
    otherwise be taken for a data line.
    """
    if line.startswith(HEADER_PREFIX):
        return LineType.HEADER
    if RECORD_DELIMITER in line:
        return LineType.RECORD
    if SCHEME_MARKER in line:
        return LineType.SCHEME
    if line.strip():
        return LineType.AMC
    return LineType.BLANK


def parse_isin(cursor: Cursor) -> Optional[str]:
    """ISIN code, or None for the "-" / "---" placeholders."""
    try:
        return lexers.alphanumeric(cursor)
    except LexError:
        pass
    for placeholder in ISIN_PLACEHOLDERS:
        try:
            lexers.tag(cursor, placeholder)
            return None
        except LexError:
            continue
    raise LexError(f"expected ISIN at offset {cursor.pos}")


def parse_name(cursor: Cursor) -> Tuple[str, FundPlan, Optional[str]]:
    """
    Scheme name up to the next semicolon, with its derived plan.

    Returns:
        Tuple of (name, plan, option). Option is not extracted yet and is
        always None.
    """
    name = lexers.take_until(cursor, RECORD_DELIMITER).strip()
    plan = FundPlan.DIRECT if "DIRECT" in name.upper() else FundPlan.REGULAR
    option = None
    return name, plan, option


def parse_record(line: str) -> NavRecordBuilder:
    """
    Parse a data line into a builder lacking the inherited context fields.

    Layout: code;isin;isin_dr;name;nav;date

    Args:
        line: Raw data line, already stripped.

    Raises:
        RecordParseError: if any field fails to lex.
    """
    cursor = Cursor(line)
    try:
        code = lexers.digits(cursor)
        lexers.separator(cursor)
        isin = parse_isin(cursor)
        lexers.separator(cursor)
        isin_dr = parse_isin(cursor)
        lexers.separator(cursor)
        name, plan, option = parse_name(cursor)
        lexers.separator(cursor)
        nav = lexers.double(cursor)
        lexers.separator(cursor)
        nav_date = lexers.fixed_date(cursor)
    except LexError as e:
        logger.debug(f"Rejected data line ({e}): {line}")
        raise RecordParseError(line) from e

    return (
        NavRecordBuilder()
        .code(code)
        .isin(isin)
        .isin_dr(isin_dr)
        .name(name)
        .plan(plan)
        .option(option)
        .nav(nav)
        .date(nav_date)
    )


def classify_maturity(prefix: str) -> Optional[FundMaturity]:
    """Maturity from a section prefix; unknown prefixes give None."""
    normalized = prefix.strip().upper()
    if normalized.startswith("CLOSE"):
        return FundMaturity.CLOSE_ENDED
    if normalized.startswith("OPEN"):
        return FundMaturity.OPEN_ENDED
    return None


def parse_scheme(line: str) -> Tuple[Optional[FundMaturity], Optional[str], str]:
    """
    Parse a section header such as
    "Open Ended Schemes(Equity Scheme - Large Cap Fund)".

    Returns:
        Tuple of (maturity, scheme group, category). The scheme group is
        None when the parentheses hold no " - " separator.

    Raises:
        RecordParseError: if the parenthesised part is missing or unclosed.
    """
    cursor = Cursor(line)
    try:
        prefix = lexers.take_until(cursor, "(")
        lexers.tag(cursor, "(")

        # Group separator only counts inside the parentheses.
        close = line.find(")", cursor.pos)
        separator = line.find(" - ", cursor.pos)
        scheme = None
        if separator >= 0 and (close < 0 or separator < close):
            scheme = lexers.take_until(cursor, " - ")
            lexers.tag(cursor, " - ")

        category = lexers.take_until(cursor, ")")
    except LexError as e:
        logger.debug(f"Rejected section line ({e}): {line}")
        raise RecordParseError(line) from e

    return classify_maturity(prefix), scheme, category
