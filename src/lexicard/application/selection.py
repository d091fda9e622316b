"""
Due-set selection and deck summaries.

Builds ordered review queues by:
1. Filtering the card map for items whose review date has arrived
2. Sorting by days overdue, most neglected first
3. Capping the result to the requested size

Everything here is read-only over the card map.
"""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date

from lexicard.domain.cards.models import CardState
from lexicard.domain.constants import MATURE_INTERVAL


@dataclass(frozen=True)
class DueItem:
    """An item selected for review, with its priority key."""

    item_id: str
    state: CardState
    days_overdue: float  # math.inf when the item was never scheduled


@dataclass(frozen=True)
class DeckSummary:
    """Counts shown on the dashboard and progress screens."""

    total: int
    due: int
    learning: int  # 0 < interval < 7
    mature: int  # interval >= 7
    new: int  # repetitions == 0


def is_due(state: CardState, today: date) -> bool:
    if state.next_review is None:
        return True
    return state.next_review <= today


def days_overdue(state: CardState, today: date) -> float:
    """
    Days since the item became due (0 if due today or in the future).

    Items without a review date are treated as infinitely overdue so they
    always sort first.
    """
    if state.next_review is None:
        return math.inf
    return max(0, (today - state.next_review).days)


def due_items(
    cards: Mapping[str, CardState],
    today: date,
    limit: int | None = None,
) -> list[DueItem]:
    """
    Select due items, most overdue first.

    Args:
        cards: Mapping of item id -> scheduling state.
        today: Calendar date to evaluate due-ness against.
        limit: Optional cap on the number of items returned.

    Returns:
        DueItems sorted by descending days overdue. Ties keep the
        iteration order of ``cards`` (the sort is stable).
    """
    selected = [
        DueItem(item_id=item_id, state=state, days_overdue=days_overdue(state, today))
        for item_id, state in cards.items()
        if is_due(state, today)
    ]
    selected.sort(key=lambda item: item.days_overdue, reverse=True)

    if limit is not None:
        selected = selected[: max(0, limit)]
    return selected


def module_queue(
    item_ids: Iterable[str],
    cards: Mapping[str, CardState],
    today: date,
    limit: int | None = None,
) -> list[DueItem]:
    """
    Order a module's vocabulary for study, regardless of due-ness.

    Unseen ids get a fresh initial state. New cards come first, then the
    rest by ascending review date.
    """
    queue = []
    for item_id in item_ids:
        state = cards.get(item_id) or CardState.initial(today)
        queue.append(
            DueItem(item_id=item_id, state=state, days_overdue=days_overdue(state, today))
        )

    queue.sort(
        key=lambda item: (
            0 if item.state.is_new else 1,
            item.state.next_review or date.min,
        )
    )

    if limit is not None:
        queue = queue[: max(0, limit)]
    return queue


def deck_summary(cards: Mapping[str, CardState], today: date) -> DeckSummary:
    states = list(cards.values())
    return DeckSummary(
        total=len(states),
        due=sum(1 for s in states if is_due(s, today)),
        learning=sum(1 for s in states if 0 < s.interval < MATURE_INTERVAL),
        mature=sum(1 for s in states if s.interval >= MATURE_INTERVAL),
        new=sum(1 for s in states if s.is_new),
    )
