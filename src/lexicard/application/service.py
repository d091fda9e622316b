"""
Review Service: Application layer facade for the host UI.

Coordinates the card store, the scheduler, the due-set selector and the
session aggregator.
"""

import logging
from collections.abc import Iterable
from datetime import date

from lexicard.application.card_store import CardStore
from lexicard.application.clock import Clock, zone_clock
from lexicard.application.scheduling.sm2 import advance
from lexicard.application.selection import (
    DeckSummary,
    DueItem,
    deck_summary,
    due_items,
    module_queue,
)
from lexicard.application.session import (
    AsyncContentLookup,
    ContentLookup,
    ReviewSession,
    build_session,
    build_session_async,
)
from lexicard.domain.cards.models import CardState
from lexicard.domain.constants import DEFAULT_SESSION_SIZE

logger = logging.getLogger(__name__)


class ReviewService:
    """
    The operations a host calls: grade, list due items, start sessions.

    Depends on a CardStore instance rather than any global state, so
    several learners (or tests) can each own one.
    """

    def __init__(
        self,
        store: CardStore,
        clock: Clock | None = None,
        session_size: int = DEFAULT_SESSION_SIZE,
    ):
        """
        Args:
            store: The learner's card store.
            clock: Returns today's calendar date; UTC date if not provided.
            session_size: Default cap for new sessions.
        """
        self.store = store
        self._clock = clock or zone_clock()
        self.session_size = session_size

    def today(self) -> date:
        return self._clock()

    def grade(self, item_id: str, quality: int | float) -> CardState:
        """
        Apply one answer to an item and persist the result.

        Items never seen before start from the initial state.
        """
        today = self._clock()
        prior = self.store.get_or_init(item_id, today)
        new_state = advance(prior, quality, today)
        self.store.put(item_id, new_state)
        logger.debug(f"Graded {item_id!r}: interval {prior.interval} -> {new_state.interval}")
        return new_state

    def get_due_items(self, limit: int | None = None) -> list[DueItem]:
        return due_items(self.store.cards(), self._clock(), limit)

    def start_session(
        self,
        content_lookup: ContentLookup,
        max_size: int | None = None,
    ) -> ReviewSession:
        """
        Start a review session over the items due today.

        Always re-queries the store, so a new session reflects every grade
        made before it.
        """
        size = self.session_size if max_size is None else max_size
        session = build_session(
            self.get_due_items(), content_lookup, size, store=self.store, clock=self._clock
        )
        logger.info(f"Session started with {len(session)} item(s)")
        return session

    async def start_session_async(
        self,
        content_lookup: AsyncContentLookup,
        max_size: int | None = None,
    ) -> ReviewSession:
        size = self.session_size if max_size is None else max_size
        session = await build_session_async(
            self.get_due_items(), content_lookup, size, store=self.store, clock=self._clock
        )
        logger.info(f"Session started with {len(session)} item(s)")
        return session

    def start_module_session(
        self,
        item_ids: Iterable[str],
        content_lookup: ContentLookup,
        max_size: int | None = None,
    ) -> ReviewSession:
        """
        Study one module's vocabulary: new words first, then by review date.

        Unlike start_session, items need not be due.
        """
        size = self.session_size if max_size is None else max_size
        queue = module_queue(item_ids, self.store.cards(), self._clock())
        return build_session(queue, content_lookup, size, store=self.store, clock=self._clock)

    def summary(self) -> DeckSummary:
        return deck_summary(self.store.cards(), self._clock())
