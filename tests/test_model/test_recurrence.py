"""Tests for calwriter.model.recurrence."""

from __future__ import annotations

import dataclasses

import pytest

from calwriter.errors import InvalidArgumentError, ParseError
from calwriter.model.recurrence import (
    ParseRecurrenceFrequencyError,
    ParseRecurrenceRuleError,
    RecurrenceFrequency,
    RecurrenceRule,
)
from calwriter.model.temporal import Date, DateTime, Time

UNTIL = DateTime(Date(1998, 1, 19), Time(7, 0, 0))


class TestRecurrenceFrequency:
    @pytest.mark.parametrize(
        "token", ["YEARLY", "MONTHLY", "WEEKLY", "DAILY", "HOURLY", "MINUTELY", "SECONDLY"]
    )
    def test_parse_format_both_ways(self, token: str) -> None:
        freq = RecurrenceFrequency.parse(token)
        assert freq.format() == token
        assert str(freq) == token

    @pytest.mark.parametrize("token", ["weekly", "Weekly", "FORTNIGHTLY", "", " WEEKLY"])
    def test_parse_rejects(self, token: str) -> None:
        with pytest.raises(ParseRecurrenceFrequencyError):
            RecurrenceFrequency.parse(token)

    def test_closed_set(self) -> None:
        assert len(RecurrenceFrequency) == 7


class TestRecurrenceRule:
    def test_format_without_until(self) -> None:
        assert RecurrenceRule(RecurrenceFrequency.WEEKLY).format() == "FREQ=WEEKLY"

    def test_format_with_until(self) -> None:
        rule = RecurrenceRule(RecurrenceFrequency.WEEKLY).with_until(UNTIL)
        assert rule.format() == "FREQ=WEEKLY;UNTIL=19980119T070000Z"
        assert rule.to_ical() == b"FREQ=WEEKLY;UNTIL=19980119T070000Z"

    def test_with_until_returns_new_rule(self) -> None:
        base = RecurrenceRule(RecurrenceFrequency.DAILY)
        bounded = base.with_until(UNTIL)
        assert base.until is None
        assert bounded.until == UNTIL
        assert bounded.frequency is RecurrenceFrequency.DAILY
        assert base != bounded

    def test_with_until_replaces_existing_bound(self) -> None:
        later = DateTime(Date(1999, 1, 1), Time(0, 0, 0))
        rule = RecurrenceRule(RecurrenceFrequency.DAILY).with_until(UNTIL).with_until(later)
        assert rule.until == later

    def test_immutable(self) -> None:
        rule = RecurrenceRule(RecurrenceFrequency.DAILY)
        with pytest.raises(dataclasses.FrozenInstanceError):
            rule.until = UNTIL  # type: ignore[misc]

    def test_hashable(self) -> None:
        bounded = RecurrenceRule(RecurrenceFrequency.WEEKLY).with_until(UNTIL)
        same = RecurrenceRule.parse("FREQ=WEEKLY;UNTIL=19980119T070000Z")
        assert hash(bounded) == hash(same)
        assert len({bounded, same, RecurrenceRule(RecurrenceFrequency.WEEKLY)}) == 2

    def test_rejects_bad_arguments(self) -> None:
        with pytest.raises(InvalidArgumentError):
            RecurrenceRule("WEEKLY")  # type: ignore[arg-type]
        with pytest.raises(InvalidArgumentError):
            RecurrenceRule(RecurrenceFrequency.WEEKLY, Date(2021, 1, 1))  # type: ignore[arg-type]


class TestRecurrenceRuleParse:
    def test_parse(self) -> None:
        assert RecurrenceRule.parse("FREQ=MONTHLY") == RecurrenceRule(RecurrenceFrequency.MONTHLY)
        assert RecurrenceRule.parse("FREQ=WEEKLY;UNTIL=19980119T070000Z") == RecurrenceRule(
            RecurrenceFrequency.WEEKLY, UNTIL
        )

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "WEEKLY",
            "FREQ=weekly",
            "FREQ=WEEKLY;",
            "FREQ=WEEKLY;COUNT=3",
            "FREQ=WEEKLY;UNTIL=19980119",
            "FREQ=WEEKLY;UNTIL=19980119T070000Z;INTERVAL=2",
            "UNTIL=19980119T070000Z;FREQ=WEEKLY",
        ],
    )
    def test_parse_rejects(self, text: str) -> None:
        with pytest.raises(ParseRecurrenceRuleError):
            RecurrenceRule.parse(text)

    def test_parse_error_is_parse_error(self) -> None:
        with pytest.raises(ParseError):
            RecurrenceRule.parse("FREQ=NEVER")

    def test_round_trip(self) -> None:
        rule = RecurrenceRule(RecurrenceFrequency.SECONDLY).with_until(UNTIL)
        assert RecurrenceRule.parse(rule.format()) == rule
