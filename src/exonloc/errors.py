"""Exception hierarchy for exonloc.

All errors raised on purpose by exonloc derive from ``ExonlocError`` so
callers can catch the whole family at once. The concrete classes also
derive from the closest builtin so generic handlers keep working:

- ConfigurationError: bad setup (unknown layout, missing data source)
- SourceIOError: the data source or a name list could not be read
- MalformedLineError: a line does not match the active column layout
- LogicError: an API was used out of order

Lookups that find nothing are not errors; they return an empty list.

Example:
    >>> from exonloc.errors import MalformedLineError
    >>> try:
    ...     parser.parse("chr1\\tNM_1")
    ... except MalformedLineError as e:
    ...     print(e.line)
"""

from __future__ import annotations


class ExonlocError(Exception):
    """Base class for all exonloc errors."""

    pass


class ConfigurationError(ExonlocError):
    """Raised when exonloc is configured with unusable settings."""

    pass


class SourceIOError(ExonlocError, OSError):
    """Raised when the underlying data source cannot be read."""

    pass


class FilterFileError(ConfigurationError, SourceIOError):
    """Raised when a gene or transcript name list cannot be read."""

    pass


class MalformedLineError(ExonlocError, ValueError):
    """Raised when a line cannot be parsed under the active layout.

    Attributes:
        line: The original, unmodified line text.
        reason: Short description of what was wrong.
    """

    def __init__(self, reason: str, line: str) -> None:
        self.reason = reason
        self.line = line
        super().__init__(f"Format error ({reason}). Failed to parse line: {line!r}")


class LogicError(ExonlocError, RuntimeError):
    """Raised when the API is misused (e.g. locating a record twice)."""

    pass
