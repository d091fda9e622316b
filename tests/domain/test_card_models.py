from datetime import date

import pytest

from lexicard.domain.cards.models import CardState, LearnerSettings, StoreSnapshot


def test_initial_state_is_due_today_and_unreviewed():
    state = CardState.initial(date(2026, 1, 2))

    assert state.interval == 0
    assert state.repetitions == 0
    assert state.ease_factor == 2.5
    assert state.next_review == date(2026, 1, 2)
    assert state.last_review is None
    assert state.quality is None
    assert state.is_new


def test_card_state_is_immutable():
    state = CardState()
    with pytest.raises(AttributeError):
        state.interval = 3  # type: ignore[misc]


def test_snapshot_defaults_are_independent():
    a = StoreSnapshot()
    b = StoreSnapshot()
    a.cards["x"] = CardState()

    assert b.cards == {}
    assert a.settings == LearnerSettings()


def test_snapshot_copy_is_deep_for_host_sections():
    snapshot = StoreSnapshot(extra={"profile": {"totalXP": 5}}, settings_extra={"fontSize": "large"})
    copied = snapshot.copy()
    copied.extra["profile"]["totalXP"] = 50
    copied.cards["x"] = CardState()

    assert snapshot.extra == {"profile": {"totalXP": 5}}
    assert snapshot.cards == {}
    assert copied.settings_extra == {"fontSize": "large"}
