"""Tests for calwriter.ical.value.Value."""

from __future__ import annotations

import pytest

from calwriter.errors import InvalidArgumentError
from calwriter.ical.value import InvalidValueError, Value


@pytest.mark.parametrize("text", ["", "plain", "tab\there", "multi\nline", "crlf\r\nline", "ünïcödé ✓"])
def test_accepts(text: str) -> None:
    assert Value(text).as_str() == text


@pytest.mark.parametrize("text", ["nul\x00", "bell\x07", "esc\x1b[0m", "del\x7f", "lone\rcr", "vt\x0b"])
def test_rejects_control_characters(text: str) -> None:
    with pytest.raises(InvalidValueError) as exc:
        Value(text)
    assert isinstance(exc.value, InvalidArgumentError)
    assert exc.value.text == text


def test_rejects_non_str() -> None:
    with pytest.raises(InvalidValueError):
        Value(b"bytes")  # type: ignore[arg-type]
    with pytest.raises(InvalidValueError):
        Value(None)  # type: ignore[arg-type]


def test_to_ical_escapes_text() -> None:
    assert Value("a,b;c\\d").to_ical() == rb"a\,b\;c\\d"
    assert Value("one\ntwo").to_ical() == rb"one\ntwo"


def test_equality_and_str() -> None:
    assert Value("x") == Value("x")
    assert Value("x") != Value("y")
    assert str(Value("x")) == "x"
    assert len({Value("x"), Value("x")}) == 1
