"""Exception hierarchy shared by the calwriter model and line boundary.

Two failure classes:
- `ParseError`: text could not be read as a value; recoverable, callers handle it.
- `InvalidArgumentError`: a constructor or setter was called with values that
  break the type's contract (out-of-range fields, disallowed characters).

Both derive from `ValueError` so generic handlers keep working.
"""

from __future__ import annotations


class CalwriterError(Exception):
    """Root of every error raised by calwriter itself."""


class InvalidArgumentError(CalwriterError, ValueError):
    """A value violated a construction or mutation precondition."""


class ParseError(CalwriterError, ValueError):
    """Text could not be parsed into the requested value type."""
