"""iCalendar DATE, TIME and DATE-TIME value types (RFC 5545 §3.3.4, §3.3.12, §3.3.5).

Only UTC times are modelled: every `Time` carries the trailing `Z` form and
local or offset times are rejected when parsing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date as _date
from datetime import datetime, time as _time, timedelta, timezone
from functools import total_ordering
from typing import Any

from calwriter.errors import InvalidArgumentError, ParseError

MAX_YEAR = 9999

_DATE_RE = re.compile(r"[0-9]{8}")
_TIME_RE = re.compile(r"([0-9]{2})([0-9]{2})([0-9]{2})Z")


# ---------- Errors ----------

class ParseDateError(ParseError):
    """Text is not a valid `YYYYMMDD` date."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid date: {text!r}")
        self.text = text


class ParseTimeError(ParseError):
    """Text is not a valid `HHMMSSZ` UTC time."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid time: {text!r}")
        self.text = text


class ParseDateTimeError(ParseError):
    """Text is not a valid `YYYYMMDDTHHMMSSZ` date-time."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid date-time: {text!r}")
        self.text = text


# ---------- Calendar arithmetic ----------

def is_leap_year(year: int) -> bool:
    """Gregorian rule: divisible by 4, except centuries not divisible by 400."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in `month` of `year`.

    Raises `InvalidArgumentError` if `month` is not in 1-12.
    """
    if month in (1, 3, 5, 7, 8, 10, 12):
        return 31
    if month in (4, 6, 9, 11):
        return 30
    if month == 2:
        return 29 if is_leap_year(year) else 28
    raise InvalidArgumentError(f"Invalid month: {month}")


def _require_int(name: str, value: Any) -> int:
    # bool is an int subclass but never a meaningful calendar field
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an int, got {type(value).__name__}")
    return value


def _check_date(year: int, month: int, day: int) -> None:
    year = _require_int("year", year)
    month = _require_int("month", month)
    day = _require_int("day", day)
    if not 0 <= year <= MAX_YEAR:
        raise InvalidArgumentError(f"Year must be between 0 and {MAX_YEAR}, got {year}")
    if not 1 <= month <= 12:
        raise InvalidArgumentError(f"Month must be between 1 and 12, got {month}")
    if not 1 <= day <= days_in_month(year, month):
        raise InvalidArgumentError(f"Day ({day}) out of range for month ({month}) of year {year}")


def _check_time(hour: int, minute: int, second: int) -> None:
    hour = _require_int("hour", hour)
    minute = _require_int("minute", minute)
    second = _require_int("second", second)
    if not 0 <= hour <= 23:
        raise InvalidArgumentError(f"Hour must be between 0 and 23, got {hour}")
    if not 0 <= minute <= 59:
        raise InvalidArgumentError(f"Minute must be between 0 and 59, got {minute}")
    # RFC 5545 allows a leap second (60); it is not supported here.
    if not 0 <= second <= 59:
        raise InvalidArgumentError(f"Second must be between 0 and 59, got {second}")


# ---------- Date ----------

@total_ordering
class Date:
    """A calendar date in the range 0000-01-01 .. 9999-12-31.

    Fields can be reassigned through the `year`, `month` and `day` setters;
    each assignment re-validates the whole date against the other two fields
    and leaves the date unchanged when it fails.

    Example:
        Date(2020, 2, 29).format()  # "20200229"
        Date.parse("20210101") == Date(2021, 1, 1)
    """

    __slots__ = ("_year", "_month", "_day")

    def __init__(self, year: int, month: int, day: int) -> None:
        _check_date(year, month, day)
        self._year = year
        self._month = month
        self._day = day

    # --- fields ---

    @property
    def year(self) -> int:
        return self._year

    @year.setter
    def year(self, year: int) -> None:
        _check_date(year, self._month, self._day)
        self._year = year

    @property
    def month(self) -> int:
        return self._month

    @month.setter
    def month(self, month: int) -> None:
        _check_date(self._year, month, self._day)
        self._month = month

    @property
    def day(self) -> int:
        return self._day

    @day.setter
    def day(self, day: int) -> None:
        _check_date(self._year, self._month, day)
        self._day = day

    # --- text ---

    @classmethod
    def parse(cls, text: str) -> Date:
        """Parse `YYYYMMDD`. Raises `ParseDateError` on any malformed input."""
        if not isinstance(text, str) or len(text) != 8 or not _DATE_RE.fullmatch(text):
            raise ParseDateError(text)
        year, month, day = int(text[0:4]), int(text[4:6]), int(text[6:8])
        if not 1 <= month <= 12 or not 1 <= day <= days_in_month(year, month):
            raise ParseDateError(text)
        return cls(year, month, day)

    def format(self) -> str:
        return f"{self._year:04d}{self._month:02d}{self._day:02d}"

    def to_ical(self) -> bytes:
        return self.format().encode("ascii")

    # --- conversions ---

    @classmethod
    def from_date(cls, value: _date) -> Date:
        return cls(value.year, value.month, value.day)

    def copy(self) -> Date:
        return Date(self._year, self._month, self._day)

    def to_date(self) -> _date:
        """Return the equivalent `datetime.date` (year 0 has none)."""
        if self._year < 1:
            raise InvalidArgumentError("Year 0 cannot be represented as datetime.date")
        return _date(self._year, self._month, self._day)

    # --- comparison ---

    def _key(self) -> tuple[int, int, int]:
        return (self._year, self._month, self._day)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._key() < other._key()

    # mutable, so not hashable
    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Date({self._year}, {self._month}, {self._day})"


# ---------- Time ----------

@dataclass(frozen=True, order=True)
class Time:
    """A UTC time of day. Leap seconds are not supported."""

    hour: int
    minute: int
    second: int

    def __post_init__(self) -> None:
        _check_time(self.hour, self.minute, self.second)

    @classmethod
    def parse(cls, text: str) -> Time:
        """Parse `HHMMSSZ`. A missing `Z` (local or offset time) is an error."""
        if not isinstance(text, str) or len(text) != 7:
            raise ParseTimeError(text)
        m = _TIME_RE.fullmatch(text)
        if not m:
            raise ParseTimeError(text)
        hour, minute, second = (int(g) for g in m.groups())
        if hour > 23 or minute > 59 or second > 59:
            raise ParseTimeError(text)
        return cls(hour, minute, second)

    @classmethod
    def from_time(cls, value: _time) -> Time:
        """Build from a naive or UTC `datetime.time`; microseconds are dropped."""
        if value.utcoffset() not in (None, timedelta(0)):
            raise InvalidArgumentError("Only UTC times are supported")
        return cls(value.hour, value.minute, value.second)

    def format(self) -> str:
        return f"{self.hour:02d}{self.minute:02d}{self.second:02d}Z"

    def to_ical(self) -> bytes:
        return self.format().encode("ascii")

    def __str__(self) -> str:
        return self.format()


# ---------- DateTime ----------

@total_ordering
class DateTime:
    """A UTC date-time: a `Date` and a `Time`, compared date first.

    Immutable and hashable. The `Date` given to the constructor is copied and
    `date` hands out a fresh copy, so no caller can reach the stored one.
    """

    __slots__ = ("_date", "_time")

    def __init__(self, date: Date, time: Time) -> None:
        if not isinstance(date, Date) or not isinstance(time, Time):
            raise InvalidArgumentError("DateTime requires a Date and a Time")
        self._date = date.copy()
        self._time = time

    @property
    def date(self) -> Date:
        return self._date.copy()

    @property
    def time(self) -> Time:
        return self._time

    @classmethod
    def parse(cls, text: str) -> DateTime:
        """Parse `YYYYMMDDTHHMMSSZ`, splitting on the first `T`."""
        if not isinstance(text, str):
            raise ParseDateTimeError(text)
        date_part, sep, time_part = text.partition("T")
        if not sep:
            raise ParseDateTimeError(text)
        try:
            return cls(Date.parse(date_part), Time.parse(time_part))
        except (ParseDateError, ParseTimeError) as e:
            raise ParseDateTimeError(text) from e

    @classmethod
    def from_datetime(cls, value: datetime) -> DateTime:
        """Convert an aware `datetime` to UTC. Naive datetimes are rejected."""
        if value.tzinfo is None or value.utcoffset() is None:
            raise InvalidArgumentError("datetime must be timezone-aware")
        utc = value.astimezone(timezone.utc)
        return cls(Date(utc.year, utc.month, utc.day), Time(utc.hour, utc.minute, utc.second))

    def to_datetime(self) -> datetime:
        d = self._date.to_date()
        t = self._time
        return datetime(d.year, d.month, d.day, t.hour, t.minute, t.second, tzinfo=timezone.utc)

    def format(self) -> str:
        return f"{self._date.format()}T{self._time.format()}"

    def to_ical(self) -> bytes:
        return self.format().encode("ascii")

    # --- comparison ---

    def _key(self) -> tuple[tuple[int, int, int], Time]:
        return (self._date._key(), self._time)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"DateTime({self._date!r}, {self._time!r})"
