"""Validated TEXT property values."""

from __future__ import annotations

import re
from typing import Any

from icalendar.prop import vText

from calwriter.errors import InvalidArgumentError

# RFC 5545 CONTROL characters, minus HTAB. LF and CRLF are kept because TEXT
# escaping turns them into the literal `\n` sequence; a lone CR has no escape.
_DISALLOWED_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]|\r(?!\n)")


class InvalidValueError(InvalidArgumentError):
    """String contains characters that cannot appear in a property value."""

    def __init__(self, text: Any, reason: str) -> None:
        super().__init__(f"Invalid property value ({reason}): {text!r}")
        self.text = text
        self.reason = reason


class Value:
    """
    A string that is safe to emit as an iCalendar TEXT value.

    Construction fails with `InvalidValueError` when the input is not a `str`
    or contains disallowed control characters. `to_ical()` returns the
    escaped form (backslash, semicolon, comma and newlines).
    """

    __slots__ = ("_text",)

    def __init__(self, text: str) -> None:
        if not isinstance(text, str):
            raise InvalidValueError(text, f"expected str, got {type(text).__name__}")
        m = _DISALLOWED_RE.search(text)
        if m:
            raise InvalidValueError(text, f"control character {m.group()!r} at {m.start()}")
        self._text = text

    def as_str(self) -> str:
        return self._text

    def to_ical(self) -> bytes:
        return vText(self._text).to_ical()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self._text == other._text

    def __hash__(self) -> int:
        return hash(self._text)

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Value({self._text!r})"
