"""Tests for calwriter.ical.contentline."""

from __future__ import annotations

import io

import pytest

from calwriter.ical.contentline import ContentLineWriter, make_contentline
from calwriter.ical.value import Value
from calwriter.model.recurrence import RecurrenceFrequency, RecurrenceRule
from calwriter.model.temporal import DateTime


class TestMakeContentline:
    def test_plain_text_is_escaped(self) -> None:
        assert make_contentline("SUMMARY", "a;b") == r"SUMMARY:a\;b"

    def test_values_with_to_ical_are_verbatim(self) -> None:
        rule = RecurrenceRule(RecurrenceFrequency.WEEKLY).with_until(DateTime.parse("19980119T070000Z"))
        assert make_contentline("RRULE", rule) == "RRULE:FREQ=WEEKLY;UNTIL=19980119T070000Z"
        assert make_contentline("DESCRIPTION", Value("x,y")) == r"DESCRIPTION:x\,y"

    def test_params(self) -> None:
        assert make_contentline("DTSTART", "20210101", {"VALUE": "DATE"}) == "DTSTART;VALUE=DATE:20210101"


class TestContentLineWriter:
    def test_writes_crlf_terminated_lines(self) -> None:
        buf = io.BytesIO()
        writer = ContentLineWriter(buf)
        writer.write_property("BEGIN", "VCALENDAR")
        writer.write(make_contentline("END", "VCALENDAR"))
        assert buf.getvalue() == b"BEGIN:VCALENDAR\r\nEND:VCALENDAR\r\n"
        assert writer.lines_written == 2

    def test_long_lines_are_folded(self) -> None:
        buf = io.BytesIO()
        text = "x" * 200
        ContentLineWriter(buf).write_property("SUMMARY", Value(text))
        out = buf.getvalue()
        physical = out.split(b"\r\n")[:-1]
        assert len(physical) > 1
        assert all(len(p) <= 75 for p in physical)
        assert all(p.startswith(b" ") for p in physical[1:])
        assert out.replace(b"\r\n ", b"") == f"SUMMARY:{text}\r\n".encode()

    def test_utf8_output(self) -> None:
        buf = io.BytesIO()
        ContentLineWriter(buf).write_property("LOCATION", Value("Zürich"))
        assert buf.getvalue() == "LOCATION:Zürich\r\n".encode("utf-8")

    def test_sink_errors_propagate(self) -> None:
        class ClosedSink:
            def write(self, data: bytes) -> None:
                raise ValueError("I/O operation on closed file")

        writer = ContentLineWriter(ClosedSink())
        with pytest.raises(ValueError, match="closed file"):
            writer.write_property("BEGIN", "VCALENDAR")
        assert writer.lines_written == 0
