"""
Review sessions: a bounded, ordered run through due items.

A session joins due item ids with their display content, then feeds each
answer through the scheduler and back into the card store.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any

from lexicard.application.card_store import CardStore
from lexicard.application.scheduling.sm2 import advance, clamp_quality, is_passing, round_half_up
from lexicard.application.selection import DueItem
from lexicard.domain.cards.models import CardState
from lexicard.domain.constants import DEFAULT_SESSION_SIZE
from lexicard.domain.errors import SessionFinishedError

logger = logging.getLogger(__name__)

ContentLookup = Mapping[str, Any] | Callable[[str], Any]
AsyncContentLookup = Callable[[str], Awaitable[Any]]


@dataclass(frozen=True)
class SessionItem:
    item_id: str
    content: Any
    state: CardState


@dataclass(frozen=True)
class SessionSummary:
    reviewed: int
    correct: int
    accuracy: float
    accuracy_percent: int


def _resolve(lookup: ContentLookup, item_id: str) -> Any:
    """Content for an id, or None if it is missing or the lookup failed."""
    try:
        if isinstance(lookup, Mapping):
            return lookup.get(item_id)
        return lookup(item_id)
    except Exception as e:
        logger.warning(f"Content lookup failed for {item_id!r}, dropping it: {e}")
        return None


def collect_items(
    due_list: Iterable[DueItem],
    content_lookup: ContentLookup,
    max_size: int = DEFAULT_SESSION_SIZE,
) -> list[SessionItem]:
    """
    Join due items with their content, keeping the due-list order.

    Ids without content are skipped; lookups stop once ``max_size`` items
    have been collected.
    """
    items: list[SessionItem] = []
    for due in due_list:
        if len(items) >= max_size:
            break
        content = _resolve(content_lookup, due.item_id)
        if content is None:
            logger.debug(f"No content for {due.item_id!r}, skipping")
            continue
        items.append(SessionItem(item_id=due.item_id, content=content, state=due.state))
    return items


async def collect_items_async(
    due_list: Iterable[DueItem],
    content_lookup: AsyncContentLookup,
    max_size: int = DEFAULT_SESSION_SIZE,
) -> list[SessionItem]:
    """Like collect_items, for a lookup that must be awaited."""
    due = list(due_list)
    results = await asyncio.gather(
        *(content_lookup(d.item_id) for d in due), return_exceptions=True
    )

    items: list[SessionItem] = []
    for entry, content in zip(due, results):
        if isinstance(content, BaseException):
            logger.warning(f"Content lookup failed for {entry.item_id!r}, dropping it: {content}")
            continue
        if content is None:
            logger.debug(f"No content for {entry.item_id!r}, skipping")
            continue
        items.append(SessionItem(item_id=entry.item_id, content=content, state=entry.state))
        if len(items) >= max_size:
            break
    return items


class ReviewSession:
    """
    One sitting of reviews.

    The session is finished once every item has been graded; after that it
    accepts no more grades.
    """

    def __init__(
        self,
        items: list[SessionItem],
        store: CardStore,
        clock: Callable[[], date],
    ):
        self.items = items
        self._store = store
        self._clock = clock
        self.position = 0
        self.reviewed = 0
        self.correct = 0

    def __len__(self) -> int:
        return len(self.items)

    @property
    def item_ids(self) -> list[str]:
        return [item.item_id for item in self.items]

    @property
    def finished(self) -> bool:
        return self.position >= len(self.items)

    @property
    def current(self) -> SessionItem | None:
        if self.finished:
            return None
        return self.items[self.position]

    @property
    def accuracy(self) -> float:
        if self.reviewed == 0:
            return 0.0
        return self.correct / self.reviewed

    def grade(self, quality: int | float) -> CardState:
        """
        Grade the current item and move to the next one.

        Returns:
            The item's new scheduling state (already persisted).

        Raises:
            SessionFinishedError: If every item has already been graded.
        """
        item = self.current
        if item is None:
            raise SessionFinishedError("Session is finished; no items left to grade")

        q = clamp_quality(quality)
        prior = self._store.get(item.item_id) or item.state
        new_state = advance(prior, q, self._clock())
        self._store.put(item.item_id, new_state)

        self.position += 1
        self.reviewed += 1
        if is_passing(q):
            self.correct += 1

        logger.debug(
            f"Graded {item.item_id!r} q={q}: next review {new_state.next_review} "
            f"({self.position}/{len(self.items)})"
        )
        return new_state

    def summary(self) -> SessionSummary:
        return SessionSummary(
            reviewed=self.reviewed,
            correct=self.correct,
            accuracy=self.accuracy,
            accuracy_percent=int(round_half_up(self.accuracy * 100)),
        )


def build_session(
    due_list: Iterable[DueItem],
    content_lookup: ContentLookup,
    max_size: int = DEFAULT_SESSION_SIZE,
    *,
    store: CardStore,
    clock: Callable[[], date],
) -> ReviewSession:
    return ReviewSession(collect_items(due_list, content_lookup, max_size), store, clock)


async def build_session_async(
    due_list: Iterable[DueItem],
    content_lookup: AsyncContentLookup,
    max_size: int = DEFAULT_SESSION_SIZE,
    *,
    store: CardStore,
    clock: Callable[[], date],
) -> ReviewSession:
    items = await collect_items_async(due_list, content_lookup, max_size)
    return ReviewSession(items, store, clock)
