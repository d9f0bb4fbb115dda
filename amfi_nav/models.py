"""
Data models for the AMFI NAV parser.

This module defines the core data structures using dataclasses for:
- NAV records emitted by the parser
- Fund classification enums (maturity, plan)
- Line classification of the raw feed
- Parse context carried between lines
- The record builder with deferred validation
"""

from dataclasses import dataclass, fields
from datetime import date
from enum import Enum, auto
from typing import Optional

from amfi_nav.exceptions import BuilderError


class FundMaturity(Enum):
    """Open or close ended funds."""
    OPEN_ENDED = "open_ended"
    CLOSE_ENDED = "close_ended"


class FundPlan(Enum):
    """
    Distribution plan of a scheme.

    Plans are identified on a best effort basis from the scheme name.
    Anything not mentioning "direct" is treated as a regular plan.
    """
    REGULAR = "regular"
    DIRECT = "direct"


class LineType(Enum):
    """Classification of a single line of the NAV feed."""
    HEADER = auto()
    AMC = auto()
    SCHEME = auto()
    RECORD = auto()
    BLANK = auto()


@dataclass(frozen=True)
class NavRecord:
    """
    Net Asset Value record for one scheme on one date.

    Attributes:
        code: AMFI scheme code
        isin: ISIN for growth / dividend payout (optional)
        isin_dr: ISIN for dividend reinvestment (optional)
        name: Scheme name
        nav: Net Asset Value per unit
        date: NAV date
        amc: Asset Management Company offering the scheme
        category: Scheme category, e.g. "Large Cap Fund"
        scheme: Scheme group, e.g. "Equity Scheme" (optional)
        maturity: Open or close ended (optional)
        plan: Regular or direct plan
        option: Growth / dividend option (not extracted yet)
    """
    code: int
    isin: Optional[str]
    isin_dr: Optional[str]
    name: str
    nav: float
    date: date
    amc: str
    category: str
    scheme: Optional[str]
    maturity: Optional[FundMaturity]
    plan: FundPlan
    option: Optional[str] = None

    def to_dict(self) -> dict:
        """
        Convert the record to a dictionary for JSON serialization.

        Returns:
            Dictionary with every record field; dates in ISO format and
            enums by value.
        """
        return {
            "code": self.code,
            "isin": self.isin,
            "isin_dr": self.isin_dr,
            "name": self.name,
            "nav": self.nav,
            "date": self.date.isoformat(),
            "amc": self.amc,
            "category": self.category,
            "scheme": self.scheme,
            "maturity": self.maturity.value if self.maturity else None,
            "plan": self.plan.value,
            "option": self.option,
        }


@dataclass
class ParseContext:
    """
    Context carried forward between lines of one parse session.

    Attributes:
        amc: Fund family announced by the last AMC line
        category: Category from the last section header
        scheme: Scheme group from the last section header
        maturity: Maturity from the last section header
    """
    amc: str = ""
    category: str = ""
    scheme: Optional[str] = None
    maturity: Optional[FundMaturity] = None

    def update_scheme(
        self,
        maturity: Optional[FundMaturity],
        scheme: Optional[str],
        category: str,
    ) -> None:
        """Replace maturity, scheme group and category together."""
        self.maturity = maturity
        self.scheme = scheme
        self.category = category


_UNSET = object()


class NavRecordBuilder:
    """
    Collects NavRecord fields one at a time and validates on build().

    Setters return the builder so calls can be chained. Optional fields
    default to None; required fields must be set explicitly.
    """

    REQUIRED_FIELDS = ("code", "name", "nav", "date", "amc", "category", "plan")
    OPTIONAL_FIELDS = ("isin", "isin_dr", "scheme", "maturity", "option")

    def __init__(self):
        self._values = {name: _UNSET for name in self.REQUIRED_FIELDS}
        self._values.update({name: None for name in self.OPTIONAL_FIELDS})

    def _set(self, name: str, value) -> "NavRecordBuilder":
        self._values[name] = value
        return self

    def code(self, value: int) -> "NavRecordBuilder":
        return self._set("code", value)

    def isin(self, value: Optional[str]) -> "NavRecordBuilder":
        return self._set("isin", value)

    def isin_dr(self, value: Optional[str]) -> "NavRecordBuilder":
        return self._set("isin_dr", value)

    def name(self, value: str) -> "NavRecordBuilder":
        return self._set("name", value)

    def nav(self, value: float) -> "NavRecordBuilder":
        return self._set("nav", value)

    def date(self, value: date) -> "NavRecordBuilder":
        return self._set("date", value)

    def amc(self, value: str) -> "NavRecordBuilder":
        return self._set("amc", value)

    def category(self, value: str) -> "NavRecordBuilder":
        return self._set("category", value)

    def scheme(self, value: Optional[str]) -> "NavRecordBuilder":
        return self._set("scheme", value)

    def maturity(self, value: Optional[FundMaturity]) -> "NavRecordBuilder":
        return self._set("maturity", value)

    def plan(self, value: FundPlan) -> "NavRecordBuilder":
        return self._set("plan", value)

    def option(self, value: Optional[str]) -> "NavRecordBuilder":
        return self._set("option", value)

    def context(self, context: ParseContext) -> "NavRecordBuilder":
        """Copy the four inherited fields from a parse context."""
        return (
            self.amc(context.amc)
            .category(context.category)
            .scheme(context.scheme)
            .maturity(context.maturity)
        )

    def build(self) -> NavRecord:
        """
        Build the immutable record.

        Raises:
            BuilderError: naming the first required field never set.
        """
        for name in self.REQUIRED_FIELDS:
            if self._values[name] is _UNSET:
                raise BuilderError(name)
        return NavRecord(**{f.name: self._values[f.name] for f in fields(NavRecord)})
