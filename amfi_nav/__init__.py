"""
AMFI daily NAV parser.

Extracts typed Net Asset Value records from the AMFI public NAV text feed,
its mirrors, and local copies.
"""

from amfi_nav.exceptions import (
    BuilderError,
    HttpStatusError,
    NavError,
    NavIOError,
    NavRequestError,
    RecordParseError,
)
from amfi_nav.models import (
    FundMaturity,
    FundPlan,
    NavRecord,
    NavRecordBuilder,
)
from amfi_nav.reader import (
    BASE_URL,
    NavRecordIterator,
    daily_nav,
    nav_from_file,
    nav_from_lines,
    nav_from_url,
)

__version__ = "1.0.0"
__all__ = [
    "BASE_URL",
    "BuilderError",
    "FundMaturity",
    "FundPlan",
    "HttpStatusError",
    "NavError",
    "NavIOError",
    "NavRecord",
    "NavRecordBuilder",
    "NavRecordIterator",
    "NavRequestError",
    "RecordParseError",
    "daily_nav",
    "nav_from_file",
    "nav_from_lines",
    "nav_from_url",
]
