"""
Error types for the AMFI NAV parser.

Session creation failures (open, network, HTTP status) are raised to the
caller. Failures inside a running session are yielded by the record
iterator as instances of these classes instead of being raised.
"""

from typing import Optional


class NavError(Exception):
    """Base class for all errors produced by amfi_nav."""


class NavIOError(NavError):
    """Read or open failure on the underlying line source."""

    def __init__(self, error: OSError):
        self.error = error
        super().__init__(f"IO error: {error}")


class NavRequestError(NavError):
    """Transport failure while fetching the feed over HTTP."""

    def __init__(self, error: Exception):
        self.error = error
        super().__init__(f"Request error: {error}")


class HttpStatusError(NavError):
    """Server answered with a non-success status code."""

    def __init__(self, status_code: int, reason: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason
        message = f"Http error: {status_code}."
        if reason:
            message = f"Http error: {status_code} {reason}."
        super().__init__(message)


class RecordParseError(NavError):
    """A data or section line did not match its grammar."""

    def __init__(self, line: str):
        self.line = line
        super().__init__(f"Error parsing line `{line}`")


class BuilderError(NavError):
    """A required record field was never set before build()."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Builder error: `{field}` must be initialized")


class LexError(Exception):
    """Raised by a field lexer that could not match at the cursor."""
