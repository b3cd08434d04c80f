"""Calendar object, its components, and serialization (RFC 5545 §3.4, §3.6)."""

from __future__ import annotations

import io
import uuid
from typing import Optional, Union

from calwriter.config import DEFAULT_PRODUCT_IDENTIFIER, get_settings
from calwriter.errors import InvalidArgumentError
from calwriter.ical.contentline import ContentLineWriter
from calwriter.ical.value import InvalidValueError, Value
from calwriter.logging_utils import get_logger
from calwriter.model.recurrence import RecurrenceRule
from calwriter.model.start import StartDateTime, StartValue
from calwriter.model.temporal import DateTime
from calwriter.ports.sink import ByteSink

log = get_logger(__name__)

__all__ = ["DEFAULT_PRODUCT_IDENTIFIER", "Calendar", "Component", "Event"]


def _text(field: str, text: str) -> Value:
    try:
        return Value(text)
    except InvalidValueError as e:
        raise InvalidArgumentError(f"Invalid {field}: {e}") from e


# ---------- Event ----------

class Event:
    """
    A VEVENT component.
    - uid: random UUID4, assigned once at construction
    - date_time_stamp: DTSTAMP, supplied by the caller
    - start: DTSTART, all-day (`Date`) or timed (`DateTime`)
    - description / location / summary / recurrence_rule: optional

    Example:
        ev = Event(Date(2021, 1, 1), DateTime.parse("20210101T000000Z"))
        ev.set_summary("New year")
    """

    def __init__(self, start: StartDateTime | StartValue, date_time_stamp: DateTime) -> None:
        if not isinstance(date_time_stamp, DateTime):
            raise InvalidArgumentError(f"DTSTAMP must be a DateTime, got {type(date_time_stamp).__name__}")
        self._uid = Value(str(uuid.uuid4()))
        self._date_time_stamp = date_time_stamp
        self._start = StartDateTime.of(start)
        self._description: Optional[Value] = None
        self._location: Optional[Value] = None
        self._summary: Optional[Value] = None
        self._recurrence_rule: Optional[RecurrenceRule] = None

    # --- read access ---

    @property
    def uid(self) -> str:
        return self._uid.as_str()

    @property
    def date_time_stamp(self) -> DateTime:
        return self._date_time_stamp

    @property
    def start(self) -> StartDateTime:
        return self._start

    @property
    def description(self) -> Optional[str]:
        return self._description.as_str() if self._description else None

    @property
    def location(self) -> Optional[str]:
        return self._location.as_str() if self._location else None

    @property
    def summary(self) -> Optional[str]:
        return self._summary.as_str() if self._summary else None

    @property
    def recurrence_rule(self) -> Optional[RecurrenceRule]:
        return self._recurrence_rule

    # --- setters ---

    def set_description(self, description: str) -> Event:
        self._description = _text("description", description)
        return self

    def set_location(self, location: str) -> Event:
        self._location = _text("location", location)
        return self

    def set_summary(self, summary: str) -> Event:
        self._summary = _text("summary", summary)
        return self

    def set_recurrence_rule(self, recurrence_rule: RecurrenceRule) -> Event:
        if not isinstance(recurrence_rule, RecurrenceRule):
            raise InvalidArgumentError(f"Expected a RecurrenceRule, got {type(recurrence_rule).__name__}")
        self._recurrence_rule = recurrence_rule
        return self

    def write(self, writer: ContentLineWriter) -> None:
        """Emit BEGIN:VEVENT .. END:VEVENT; optional properties only when set."""
        writer.write_property("BEGIN", "VEVENT")
        writer.write_property("UID", self._uid)
        writer.write_property("DTSTAMP", self._date_time_stamp)
        if self._start.is_all_day and get_settings().mark_all_day_start:
            writer.write_property("DTSTART", self._start, {"VALUE": "DATE"})
        else:
            writer.write_property("DTSTART", self._start)
        if self._description is not None:
            writer.write_property("DESCRIPTION", self._description)
        if self._location is not None:
            writer.write_property("LOCATION", self._location)
        if self._summary is not None:
            writer.write_property("SUMMARY", self._summary)
        if self._recurrence_rule is not None:
            writer.write_property("RRULE", self._recurrence_rule)
        writer.write_property("END", "VEVENT")

    def __repr__(self) -> str:
        return f"Event(uid={self.uid!r}, start={self._start.format()!r})"


# ---------- Components ----------

# Closed set of component kinds. A new kind is added here and in
# `_write_component`; existing kinds keep their output unchanged.
Component = Union[Event]
COMPONENT_TYPES: tuple[type, ...] = (Event,)


def _write_component(component: Component, writer: ContentLineWriter) -> None:
    if isinstance(component, Event):
        component.write(writer)
        return
    raise InvalidArgumentError(f"Unsupported component: {type(component).__name__}")


# ---------- Calendar ----------

class Calendar:
    """
    An iCalendar object: PRODID, VERSION and an ordered list of components.

    Usage:
        cal = Calendar().add_component(event)
        with open("out.ics", "wb") as fh:
            cal.write(fh)
    """

    def __init__(self) -> None:
        self._product_identifier: Optional[Value] = None
        self._components: list[Component] = []

    @property
    def product_identifier(self) -> str:
        """The PRODID; falls back to the configured default when unset."""
        if self._product_identifier is None:
            return get_settings().product_identifier
        return self._product_identifier.as_str()

    def set_product_identifier(self, product_identifier: str) -> Calendar:
        self._product_identifier = _text("product identifier", product_identifier)
        return self

    @property
    def components(self) -> tuple[Component, ...]:
        return tuple(self._components)

    def add_component(self, component: Component) -> Calendar:
        if not isinstance(component, COMPONENT_TYPES):
            raise InvalidArgumentError(f"Unsupported component: {type(component).__name__}")
        self._components.append(component)
        return self

    # --- Serialization ---

    def write(self, sink: ByteSink) -> None:
        """
        Serialize the calendar to `sink` as CRLF-terminated content lines.
        Output order: BEGIN, PRODID, VERSION, components in insertion order, END.
        The first sink error stops emission and is re-raised unchanged; the
        sink may already hold a prefix of the output.
        """
        writer = ContentLineWriter(sink)
        try:
            writer.write_property("BEGIN", "VCALENDAR")
            writer.write_property("PRODID", Value(self.product_identifier))
            writer.write_property("VERSION", "2.0")
            for component in self._components:
                _write_component(component, writer)
            writer.write_property("END", "VCALENDAR")
        except Exception as e:
            log.warning(
                "calendar.write_failed",
                extra={"error": str(e), "lines_written": writer.lines_written},
            )
            raise
        log.debug(
            "calendar.write_done",
            extra={"components": len(self._components), "lines_written": writer.lines_written},
        )

    def to_ical(self) -> bytes:
        """Serialize into memory and return the bytes."""
        buf = io.BytesIO()
        self.write(buf)
        return buf.getvalue()

    def __repr__(self) -> str:
        return f"Calendar(product_identifier={self.product_identifier!r}, components={len(self._components)})"
