"""Recurrence rules (RFC 5545 §3.3.10), limited to FREQ and an optional UNTIL."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from calwriter.errors import InvalidArgumentError, ParseError
from calwriter.logging_utils import get_logger
from calwriter.model.temporal import DateTime, ParseDateTimeError

log = get_logger(__name__)


class ParseRecurrenceFrequencyError(ParseError):
    """Token is not one of the seven RFC 5545 frequencies."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid recurrence frequency: {text!r}")
        self.text = text


class ParseRecurrenceRuleError(ParseError):
    """Text is not a `FREQ=<token>[;UNTIL=<date-time>]` rule."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid recurrence rule: {text!r}")
        self.text = text


class RecurrenceFrequency(Enum):
    """How often a recurrence rule repeats."""

    YEARLY = "YEARLY"
    MONTHLY = "MONTHLY"
    WEEKLY = "WEEKLY"
    DAILY = "DAILY"
    HOURLY = "HOURLY"
    MINUTELY = "MINUTELY"
    SECONDLY = "SECONDLY"

    @classmethod
    def parse(cls, text: str) -> RecurrenceFrequency:
        """Exact, upper-case token match."""
        try:
            return cls(text)
        except ValueError:
            raise ParseRecurrenceFrequencyError(text) from None

    def format(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RecurrenceRule:
    """
    A repetition specification for an event.
    - frequency: the FREQ part
    - until: inclusive end bound, or None for an unbounded rule

    Example:
        RecurrenceRule(RecurrenceFrequency.WEEKLY).format()  # "FREQ=WEEKLY"
    """

    frequency: RecurrenceFrequency
    until: Optional[DateTime] = None

    def __post_init__(self) -> None:
        if not isinstance(self.frequency, RecurrenceFrequency):
            raise InvalidArgumentError(f"Not a RecurrenceFrequency: {self.frequency!r}")
        if self.until is not None and not isinstance(self.until, DateTime):
            raise InvalidArgumentError(f"UNTIL must be a DateTime, got {type(self.until).__name__}")

    def with_until(self, until: DateTime) -> RecurrenceRule:
        """Return a copy of this rule ending (inclusively) at `until`."""
        return replace(self, until=until)

    @classmethod
    def parse(cls, text: str) -> RecurrenceRule:
        """
        Parse `FREQ=<token>` or `FREQ=<token>;UNTIL=<YYYYMMDDTHHMMSSZ>`.
        Parts must appear in that order; any other part is rejected.
        """
        if not isinstance(text, str):
            raise ParseRecurrenceRuleError(text)
        freq_part, sep, until_part = text.partition(";")
        key, eq, token = freq_part.partition("=")
        if key != "FREQ" or not eq:
            raise ParseRecurrenceRuleError(text)
        try:
            rule = cls(RecurrenceFrequency.parse(token))
            if not sep:
                return rule
            key, eq, value = until_part.partition("=")
            if key != "UNTIL" or not eq:
                raise ParseRecurrenceRuleError(text)
            return rule.with_until(DateTime.parse(value))
        except (ParseRecurrenceFrequencyError, ParseDateTimeError) as e:
            log.debug("recurrence.parse_failed", extra={"rrule": text, "error": str(e)})
            raise ParseRecurrenceRuleError(text) from e

    def format(self) -> str:
        out = f"FREQ={self.frequency.format()}"
        if self.until is not None:
            out += f";UNTIL={self.until.format()}"
        return out

    def to_ical(self) -> bytes:
        return self.format().encode("ascii")

    def __str__(self) -> str:
        return self.format()
