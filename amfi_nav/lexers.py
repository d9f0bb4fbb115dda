"""
Field lexers for the AMFI NAV feed.

Each lexer looks at a Cursor, and either advances it past the matched token
and returns the decoded value, or raises LexError without moving the
cursor. None of them look ahead beyond the token they match.
"""

import re
from datetime import date, datetime

from amfi_nav.exceptions import LexError

DIGITS_PATTERN = re.compile(r"[0-9]+")
DOUBLE_PATTERN = re.compile(r"[0-9]*(?:\.[0-9]*)?")
ALPHANUMERIC_PATTERN = re.compile(r"[^\W_]+")
SEPARATOR_PATTERN = re.compile(r"[\s;]*")

DATE_FORMAT = "%d-%b-%Y"
DATE_WIDTH = 11


class Cursor:
    """
    Read position over a single line of text.

    Attributes:
        text: The full line being scanned
        pos: Offset of the next unread character
    """

    def __init__(self, text: str, pos: int = 0):
        self.text = text
        self.pos = pos

    @property
    def rest(self) -> str:
        """Unread remainder of the line."""
        return self.text[self.pos:]

    def __repr__(self) -> str:
        return f"Cursor({self.text!r}, pos={self.pos})"


def _match(cursor: Cursor, pattern: re.Pattern, what: str) -> str:
    """Match pattern at the cursor; advance on a non-empty match."""
    match = pattern.match(cursor.text, cursor.pos)
    if not match or match.end() == cursor.pos:
        raise LexError(f"expected {what} at offset {cursor.pos}")
    cursor.pos = match.end()
    return match.group(0)


def digits(cursor: Cursor) -> int:
    """Decimal integer: one or more ASCII digits."""
    return int(_match(cursor, DIGITS_PATTERN, "digits"))


def double(cursor: Cursor) -> float:
    """
    Decimal number: digits with at most one decimal point.

    A second decimal point ends the token and is left unconsumed, so
    "1.2.3" lexes as 1.2 with ".3" remaining.
    """
    start = cursor.pos
    token = _match(cursor, DOUBLE_PATTERN, "decimal number")
    if token == ".":
        cursor.pos = start
        raise LexError(f"expected decimal number at offset {start}")
    return float(token)


def fixed_date(cursor: Cursor) -> date:
    """Date in dd-Mon-yyyy layout, exactly eleven characters wide."""
    end = cursor.pos + DATE_WIDTH
    if end > len(cursor.text):
        raise LexError(f"expected date at offset {cursor.pos}, line too short")
    try:
        value = datetime.strptime(cursor.text[cursor.pos:end], DATE_FORMAT).date()
    except ValueError as e:
        raise LexError(f"expected date at offset {cursor.pos}: {e}") from e
    cursor.pos = end
    return value


def alphanumeric(cursor: Cursor) -> str:
    """Run of letters and digits."""
    return _match(cursor, ALPHANUMERIC_PATTERN, "alphanumeric")


def separator(cursor: Cursor) -> None:
    """Skip whitespace and semicolons. Always succeeds."""
    cursor.pos = SEPARATOR_PATTERN.match(cursor.text, cursor.pos).end()


def take_until(cursor: Cursor, delimiter: str) -> str:
    """Everything up to, not including, the next delimiter."""
    index = cursor.text.find(delimiter, cursor.pos)
    if index < 0:
        raise LexError(f"delimiter {delimiter!r} not found after offset {cursor.pos}")
    value = cursor.text[cursor.pos:index]
    cursor.pos = index
    return value


def tag(cursor: Cursor, literal: str) -> str:
    """Exact literal at the cursor."""
    if not cursor.text.startswith(literal, cursor.pos):
        raise LexError(f"expected {literal!r} at offset {cursor.pos}")
    cursor.pos += len(literal)
    return literal
