"""Tests for due-set selection and deck summaries."""

import math
from datetime import date, timedelta

from lexicard.application.selection import (
    days_overdue,
    deck_summary,
    due_items,
    is_due,
    module_queue,
)
from lexicard.domain.cards.models import CardState

TODAY = date(2026, 3, 15)


def _due_on(offset_days: int | None, **kwargs) -> CardState:
    if offset_days is None:
        return CardState(next_review=None, **kwargs)
    return CardState(next_review=TODAY + timedelta(days=offset_days), **kwargs)


class TestIsDue:
    def test_past_and_today_are_due(self):
        assert is_due(_due_on(-3), TODAY)
        assert is_due(_due_on(0), TODAY)

    def test_future_is_not_due(self):
        assert not is_due(_due_on(1), TODAY)

    def test_unscheduled_is_due(self):
        assert is_due(_due_on(None), TODAY)


class TestDaysOverdue:
    def test_counts_calendar_days(self):
        assert days_overdue(_due_on(-5), TODAY) == 5

    def test_never_negative(self):
        assert days_overdue(_due_on(4), TODAY) == 0

    def test_unscheduled_is_infinite(self):
        assert days_overdue(_due_on(None), TODAY) == math.inf


class TestDueItems:
    def test_orders_unscheduled_then_most_overdue(self):
        cards = {
            "one-day": _due_on(-1),
            "never": _due_on(None),
            "five-days": _due_on(-5),
        }

        result = due_items(cards, TODAY)

        assert [d.item_id for d in result] == ["never", "five-days", "one-day"]
        assert [d.days_overdue for d in result] == [math.inf, 5, 1]

    def test_excludes_future_items(self):
        cards = {"later": _due_on(3), "now": _due_on(0)}
        assert [d.item_id for d in due_items(cards, TODAY)] == ["now"]

    def test_ties_keep_input_order(self):
        cards = {"b": _due_on(-2), "a": _due_on(-2), "c": _due_on(-2)}
        assert [d.item_id for d in due_items(cards, TODAY)] == ["b", "a", "c"]

    def test_limit_caps_result(self):
        cards = {f"w{i}": _due_on(-i) for i in range(10)}
        result = due_items(cards, TODAY, limit=3)

        assert [d.item_id for d in result] == ["w9", "w8", "w7"]

    def test_repeat_calls_are_identical_and_do_not_mutate(self):
        cards = {"x": _due_on(-1), "y": _due_on(None), "z": _due_on(2)}
        before = dict(cards)

        first = due_items(cards, TODAY)
        second = due_items(cards, TODAY)

        assert first == second
        assert cards == before

    def test_empty_store(self):
        assert due_items({}, TODAY) == []


class TestModuleQueue:
    def test_new_cards_first_then_by_review_date(self):
        cards = {
            "late": _due_on(10, repetitions=2, interval=6),
            "soon": _due_on(2, repetitions=1, interval=1),
            "fresh": _due_on(0),
        }

        result = module_queue(["late", "soon", "fresh", "unseen"], cards, TODAY)

        assert [d.item_id for d in result] == ["fresh", "unseen", "soon", "late"]

    def test_unseen_ids_get_initial_state(self):
        result = module_queue(["new-word"], {}, TODAY)
        assert result[0].state == CardState.initial(TODAY)

    def test_limit(self):
        result = module_queue([f"w{i}" for i in range(30)], {}, TODAY, limit=20)
        assert len(result) == 20


def test_deck_summary():
    cards = {
        "new": _due_on(0),
        "learning": _due_on(3, interval=6, repetitions=2),
        "mature": _due_on(-1, interval=15, repetitions=3),
        "lapsed": _due_on(1, interval=1, repetitions=0),
    }

    summary = deck_summary(cards, TODAY)

    assert summary.total == 4
    assert summary.due == 2
    assert summary.learning == 2
    assert summary.mature == 1
    assert summary.new == 2
