"""Start of an event: either a whole day or a precise UTC date-time."""

from __future__ import annotations

from typing import Union

from calwriter.errors import InvalidArgumentError
from calwriter.model.temporal import Date, DateTime

StartValue = Union[Date, DateTime]


class StartDateTime:
    """
    Tagged wrapper over `Date` (all-day event) and `DateTime` (timed event).
    Build it with `from_date`, `from_date_time` or `of`. A wrapped `Date` is
    copied on the way in and on the way out, so the start never changes.
    """

    __slots__ = ("_value",)

    def __init__(self, value: StartValue) -> None:
        if isinstance(value, Date):
            value = value.copy()
        elif not isinstance(value, DateTime):
            raise InvalidArgumentError(f"Start must be a Date or DateTime, got {type(value).__name__}")
        self._value: StartValue = value

    @classmethod
    def from_date(cls, date: Date) -> StartDateTime:
        if not isinstance(date, Date):
            raise InvalidArgumentError(f"Expected a Date, got {type(date).__name__}")
        return cls(date)

    @classmethod
    def from_date_time(cls, date_time: DateTime) -> StartDateTime:
        if not isinstance(date_time, DateTime):
            raise InvalidArgumentError(f"Expected a DateTime, got {type(date_time).__name__}")
        return cls(date_time)

    @classmethod
    def of(cls, value: StartDateTime | StartValue) -> StartDateTime:
        """Accept an existing `StartDateTime`, a `Date` or a `DateTime`."""
        if isinstance(value, StartDateTime):
            return value
        return cls(value)

    @property
    def value(self) -> StartValue:
        if isinstance(self._value, Date):
            return self._value.copy()
        return self._value

    @property
    def is_all_day(self) -> bool:
        return isinstance(self._value, Date)

    def format(self) -> str:
        return self._value.format()

    def to_ical(self) -> bytes:
        return self.format().encode("ascii")

    def _key(self) -> tuple:
        if isinstance(self._value, Date):
            return (Date, self._value._key())
        return (DateTime, self._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StartDateTime):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"StartDateTime({self._value!r})"
