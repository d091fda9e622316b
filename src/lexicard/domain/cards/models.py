"""
Domain models for card scheduling state.

These are pure data structures with no I/O or external dependencies.
"""

import copy
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from lexicard.domain.constants import DEFAULT_EASE_FACTOR


@dataclass(frozen=True)
class CardState:
    """
    SM-2 scheduling state of a single learnable item.

    Attributes:
        interval: Days until the next review (0 = never successfully reviewed).
        repetitions: Consecutive successful reviews, reset to 0 on a failed grade.
        ease_factor: Interval growth multiplier, never below 1.3.
        next_review: Calendar date the item becomes due. None means the item
            was never scheduled and is treated as maximally overdue.
        last_review: Date of the most recent grading, None if never graded.
        quality: Last grade received (0-5), None if never graded.
    """

    interval: int = 0
    repetitions: int = 0
    ease_factor: float = DEFAULT_EASE_FACTOR
    next_review: date | None = None
    last_review: date | None = None
    quality: int | None = None

    @classmethod
    def initial(cls, today: date) -> "CardState":
        """State of an item the first time it is seen: due today, never reviewed."""
        return cls(next_review=today)

    @property
    def is_new(self) -> bool:
        return self.repetitions == 0


@dataclass(frozen=True)
class LearnerSettings:
    """Learner preferences persisted alongside the cards."""

    primary_language: str = "uk"
    secondary_language: str = "en"
    daily_goal_minutes: int = 15
    show_pronunciation: bool = True
    auto_play_audio: bool = False
    module_locking: bool = True
    theme: str = "light"


@dataclass
class StoreSnapshot:
    """
    Everything a card repository persists: settings plus per-item state.

    Attributes:
        extra: Top-level document sections owned by the host (profile,
            progress, ...). Carried through untouched.
        settings_extra: Settings keys with no LearnerSettings field, kept
            the same way.
    """

    cards: dict[str, CardState] = field(default_factory=dict)
    settings: LearnerSettings = field(default_factory=LearnerSettings)
    extra: dict[str, Any] = field(default_factory=dict)
    settings_extra: dict[str, Any] = field(default_factory=dict)

    def copy(self) -> "StoreSnapshot":
        """Copy whose dicts can be changed without touching this one."""
        return StoreSnapshot(
            cards=dict(self.cards),
            settings=self.settings,
            extra=copy.deepcopy(self.extra),
            settings_extra=copy.deepcopy(self.settings_extra),
        )
