"""
Card Store: owns the in-memory card map and writes every change through.

There is one store per learner; it is built explicitly at startup and handed
to the services that need it.
"""

import copy
import logging
from collections.abc import Callable, Mapping
from dataclasses import replace
from datetime import date
from types import MappingProxyType

from lexicard.domain.cards.models import CardState, LearnerSettings, StoreSnapshot
from lexicard.domain.cards.ports import CardRepository
from lexicard.infrastructure.adapters.storage.document import (
    DocumentError,
    decode_document,
    encode_document,
)

logger = logging.getLogger(__name__)

Listener = Callable[[str | None, CardState | None], None]


class CardStore:
    """
    Keyed map of item id -> CardState backed by a CardRepository.

    Reads always see the latest committed state; each mutation is applied
    in memory and persisted before the call returns.
    """

    def __init__(self, repository: CardRepository, snapshot: StoreSnapshot | None = None):
        """
        Args:
            repository: The port used for persistence.
            snapshot: Initial content, written to the repository so later
                per-card saves extend it. Loaded from the repository if
                omitted.

        Raises:
            StorageError: If the initial snapshot cannot be written.
        """
        self._repo = repository
        if snapshot is None:
            snapshot = repository.load_all()
        else:
            repository.save_all(snapshot)
        self._cards: dict[str, CardState] = dict(snapshot.cards)
        self._settings = snapshot.settings
        self._extra = copy.deepcopy(snapshot.extra)
        self._settings_extra = copy.deepcopy(snapshot.settings_extra)
        self._listeners: list[Listener] = []

    @classmethod
    def open(cls, repository: CardRepository) -> "CardStore":
        store = cls(repository)
        logger.info(f"Card store opened with {len(store)} card(s)")
        return store

    # ------------------------------------------------------------------
    # Cards
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._cards

    def get(self, item_id: str) -> CardState | None:
        return self._cards.get(item_id)

    def get_or_init(self, item_id: str, today: date) -> CardState:
        """Stored state, or the initial state for an item never seen before."""
        state = self._cards.get(item_id)
        return state if state is not None else CardState.initial(today)

    def cards(self) -> Mapping[str, CardState]:
        """Read-only live view of the card map."""
        return MappingProxyType(self._cards)

    def put(self, item_id: str, state: CardState) -> None:
        self._repo.save_one(item_id, state)
        self._cards[item_id] = state
        self._notify(item_id, state)

    def replace_all(self, cards: Mapping[str, CardState]) -> None:
        self._commit(replace(self.snapshot(), cards=dict(cards)))

    def reset(self) -> None:
        """Forget every card and setting, host sections included."""
        self._commit(StoreSnapshot())
        logger.info("Card store reset")

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            cards=dict(self._cards),
            settings=self._settings,
            extra=copy.deepcopy(self._extra),
            settings_extra=copy.deepcopy(self._settings_extra),
        )

    def _commit(self, snapshot: StoreSnapshot) -> None:
        """Persist a whole new snapshot, then make it the live state."""
        self._repo.save_all(snapshot)
        self._cards = dict(snapshot.cards)
        self._settings = snapshot.settings
        self._extra = copy.deepcopy(snapshot.extra)
        self._settings_extra = copy.deepcopy(snapshot.settings_extra)
        self._notify(None, None)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    @property
    def settings(self) -> LearnerSettings:
        return self._settings

    def update_settings(self, **changes) -> LearnerSettings:
        """
        Change one or more learner settings.

        Raises:
            TypeError: If a keyword is not a known setting.
        """
        settings = replace(self._settings, **changes)
        self._commit(replace(self.snapshot(), settings=settings))
        return self._settings

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    def export_data(self) -> str:
        return encode_document(self.snapshot())

    def import_data(self, text: str, today: date) -> bool:
        """
        Replace the whole state with an exported document.

        Returns:
            False (leaving the store untouched) if the text is not a
            versioned state document.
        """
        try:
            snapshot = decode_document(text, today, strict=True)
        except DocumentError as e:
            logger.error(f"Import failed: {e}")
            return False

        self._commit(snapshot)
        logger.info(f"Imported {len(self._cards)} card(s)")
        return True

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callback run after each committed change.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, item_id: str | None, state: CardState | None) -> None:
        for listener in list(self._listeners):
            try:
                listener(item_id, state)
            except Exception as e:
                logger.error(f"Listener error: {e}", exc_info=True)
