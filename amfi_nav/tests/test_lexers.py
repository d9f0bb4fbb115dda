"""Tests for field lexers."""

from datetime import date

import pytest

from amfi_nav import lexers
from amfi_nav.exceptions import LexError
from amfi_nav.lexers import Cursor


class TestDigits:
    """Tests for the decimal integer lexer."""

    def test_digits(self):
        """Test lexing a run of digits."""
        cursor = Cursor("119551;INF")

        assert lexers.digits(cursor) == 119551
        assert cursor.rest == ";INF"

    def test_digits_empty_fails(self):
        """Test that no digits fails without consuming input."""
        cursor = Cursor("abc")

        with pytest.raises(LexError):
            lexers.digits(cursor)
        assert cursor.pos == 0


class TestDouble:
    """Tests for the decimal number lexer."""

    def test_double(self):
        """Test lexing a decimal number."""
        cursor = Cursor("15.1234;01-Jan-2020")

        assert lexers.double(cursor) == pytest.approx(15.1234)
        assert cursor.rest == ";01-Jan-2020"

    def test_double_integer(self):
        """Test lexing a number without fraction."""
        assert lexers.double(Cursor("100")) == 100.0

    def test_double_stops_at_second_point(self):
        """Test that a second decimal point is left unconsumed."""
        cursor = Cursor("1.2.3")

        assert lexers.double(cursor) == pytest.approx(1.2)
        assert cursor.rest == ".3"

    def test_double_empty_fails(self):
        """Test that a missing number fails."""
        cursor = Cursor("N.A.")

        with pytest.raises(LexError):
            lexers.double(cursor)
        assert cursor.pos == 0

    def test_double_lone_point_fails(self):
        """Test that a bare decimal point is not a number."""
        cursor = Cursor(".;")

        with pytest.raises(LexError):
            lexers.double(cursor)
        assert cursor.pos == 0


class TestFixedDate:
    """Tests for the fixed-width date lexer."""

    def test_date(self):
        """Test lexing a dd-Mon-yyyy date."""
        cursor = Cursor("26-Mar-2024 trailing")

        assert lexers.fixed_date(cursor) == date(2024, 3, 26)
        assert cursor.rest == " trailing"

    def test_date_too_short(self):
        """Test that fewer than eleven characters fails."""
        cursor = Cursor("01-Jan-20")

        with pytest.raises(LexError):
            lexers.fixed_date(cursor)
        assert cursor.pos == 0

    def test_date_wrong_layout(self):
        """Test that another layout fails."""
        with pytest.raises(LexError):
            lexers.fixed_date(Cursor("2020-01-01x"))


class TestAlphanumeric:
    """Tests for the alphanumeric run lexer."""

    def test_alphanumeric(self):
        """Test lexing an ISIN-like run."""
        cursor = Cursor("INF209K01YN0;-")

        assert lexers.alphanumeric(cursor) == "INF209K01YN0"
        assert cursor.rest == ";-"

    def test_alphanumeric_empty_fails(self):
        """Test that punctuation is not alphanumeric."""
        with pytest.raises(LexError):
            lexers.alphanumeric(Cursor("-;"))


class TestSeparator:
    """Tests for the separator lexer."""

    def test_separator_skips_whitespace_and_semicolons(self):
        """Test skipping a mixed separator run."""
        cursor = Cursor(" ; ;\tX")

        lexers.separator(cursor)
        assert cursor.rest == "X"

    def test_separator_consumes_nothing(self):
        """Test that the separator always succeeds."""
        cursor = Cursor("X")

        lexers.separator(cursor)
        assert cursor.pos == 0


class TestTakeUntil:
    """Tests for bounded capture and literal tags."""

    def test_take_until(self):
        """Test capture up to a delimiter."""
        cursor = Cursor("Some Fund;15.1")

        assert lexers.take_until(cursor, ";") == "Some Fund"
        assert cursor.rest == ";15.1"

    def test_take_until_missing_delimiter(self):
        """Test that a missing delimiter fails."""
        cursor = Cursor("no delimiter")

        with pytest.raises(LexError):
            lexers.take_until(cursor, ";")
        assert cursor.pos == 0

    def test_tag(self):
        """Test matching a literal."""
        cursor = Cursor("(Equity)")

        assert lexers.tag(cursor, "(") == "("
        assert cursor.rest == "Equity)"

        with pytest.raises(LexError):
            lexers.tag(cursor, "(")
