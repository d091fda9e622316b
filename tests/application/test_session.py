"""Tests for review session aggregation."""

from datetime import date, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from lexicard.application.selection import due_items
from lexicard.application.session import (
    build_session,
    build_session_async,
    collect_items,
)
from lexicard.domain.cards.models import CardState
from lexicard.domain.errors import SessionFinishedError

TODAY = date(2026, 3, 15)


def _overdue_cards(count: int) -> dict[str, CardState]:
    return {f"w{i:02d}": CardState(next_review=TODAY - timedelta(days=i)) for i in range(count)}


def _words(ids) -> dict[str, dict]:
    return {item_id: {"ro": item_id, "en": f"{item_id}-en"} for item_id in ids}


class TestCollectItems:
    def test_truncates_preserving_priority_order(self):
        due = due_items(_overdue_cards(50), TODAY)

        items = collect_items(due, _words(d.item_id for d in due), max_size=20)

        assert len(items) == 20
        assert [i.item_id for i in items] == [d.item_id for d in due[:20]]

    def test_drops_ids_without_content(self):
        due = due_items(_overdue_cards(5), TODAY)
        content = _words(["w04", "w02", "w00"])

        items = collect_items(due, content, max_size=20)

        assert [i.item_id for i in items] == ["w04", "w02", "w00"]

    def test_size_is_min_of_max_and_resolved(self):
        due = due_items(_overdue_cards(30), TODAY)
        content = _words(d.item_id for d in due if d.item_id != "w29")

        assert len(collect_items(due, content, max_size=20)) == 20
        assert len(collect_items(due, content, max_size=100)) == 29

    def test_callable_lookup_and_failures_drop_single_item(self):
        due = due_items(_overdue_cards(3), TODAY)

        def lookup(item_id):
            if item_id == "w01":
                raise KeyError(item_id)
            return {"ro": item_id}

        items = collect_items(due, lookup, max_size=20)

        assert [i.item_id for i in items] == ["w02", "w00"]

    def test_items_carry_content_and_state(self):
        due = due_items(_overdue_cards(1), TODAY)
        item = collect_items(due, _words(["w00"]))[0]

        assert item.content == {"ro": "w00", "en": "w00-en"}
        assert item.state == due[0].state


class TestReviewSession:
    @pytest.fixture
    def session(self, store, clock):
        for item_id, state in _overdue_cards(3).items():
            store.put(item_id, state)
        due = due_items(store.cards(), TODAY)
        return build_session(due, _words(store.cards()), 20, store=store, clock=clock)

    def test_grade_updates_store_and_statistics(self, session, store):
        first = session.current.item_id

        new_state = session.grade(4)

        assert store.get(first) == new_state
        assert new_state.next_review == TODAY + timedelta(days=1)
        assert session.position == 1
        assert session.reviewed == 1
        assert session.correct == 1

    def test_accuracy(self, session):
        assert session.accuracy == 0.0

        session.grade(5)
        session.grade(0)
        session.grade(2)

        assert session.accuracy == pytest.approx(1 / 3)
        summary = session.summary()
        assert summary.reviewed == 3
        assert summary.correct == 1
        assert summary.accuracy_percent == 33

    def test_session_finishes_and_rejects_more_grades(self, session):
        for _ in range(3):
            session.grade(4)

        assert session.finished
        assert session.current is None
        with pytest.raises(SessionFinishedError):
            session.grade(4)
        assert session.reviewed == 3

    def test_grade_reads_latest_committed_state(self, session, store):
        item_id = session.current.item_id
        store.put(item_id, CardState(interval=6, repetitions=2, ease_factor=2.5))

        new_state = session.grade(4)

        assert new_state.interval == 15

    def test_empty_session_is_finished(self, store, clock):
        session = build_session([], {}, 20, store=store, clock=clock)

        assert session.finished
        assert len(session) == 0
        assert session.summary().accuracy == 0.0

    def test_persistence_goes_through_repository(self, clock):
        store = MagicMock()
        store.get.return_value = None
        due = due_items(_overdue_cards(1), TODAY)
        session = build_session(due, _words(["w00"]), store=store, clock=clock)

        new_state = session.grade(5)

        store.put.assert_called_once_with("w00", new_state)


class TestAsyncSession:
    @pytest.mark.asyncio
    async def test_async_lookup_drops_missing_and_failed(self, store, clock):
        due = due_items(_overdue_cards(4), TODAY)
        results = {"w03": {"ro": "w03"}, "w02": None, "w00": {"ro": "w00"}}

        async def lookup(item_id):
            if item_id == "w01":
                raise TimeoutError("slow network")
            return results[item_id]

        session = await build_session_async(due, lookup, 20, store=store, clock=clock)

        assert session.item_ids == ["w03", "w00"]

    @pytest.mark.asyncio
    async def test_async_truncates(self, store, clock):
        due = due_items(_overdue_cards(10), TODAY)
        lookup = AsyncMock(side_effect=lambda item_id: {"ro": item_id})

        session = await build_session_async(due, lookup, 4, store=store, clock=clock)

        assert session.item_ids == [d.item_id for d in due[:4]]
