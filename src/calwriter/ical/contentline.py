"""Content-line construction and writing, backed by the `icalendar` library.

`icalendar` owns the wire mechanics: TEXT escaping, folding at 75 octets.
This module only adds CRLF termination and the sink contract.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from icalendar.parser import Contentline, Parameters

from calwriter.ports.sink import ByteSink

CRLF = b"\r\n"


def make_contentline(name: str, value: Any, params: Optional[Mapping[str, str]] = None) -> Contentline:
    """
    Build one `NAME[;PARAM=...]:VALUE` line.
    Values exposing `to_ical()` (Date, DateTime, RecurrenceRule, Value, ...) are
    emitted as they render themselves; plain strings are TEXT-escaped.
    """
    return Contentline.from_parts(name, Parameters(params or {}), value)


class ContentLineWriter:
    """
    Appends folded, CRLF-terminated content lines to a `ByteSink`.
    Sink errors propagate unchanged; nothing is buffered or retried.
    """

    def __init__(self, sink: ByteSink) -> None:
        self._sink = sink
        self.lines_written = 0

    def write(self, line: Contentline) -> None:
        self._sink.write(line.to_ical() + CRLF)
        self.lines_written += 1

    def write_property(self, name: str, value: Any, params: Optional[Mapping[str, str]] = None) -> None:
        self.write(make_contentline(name, value, params))
