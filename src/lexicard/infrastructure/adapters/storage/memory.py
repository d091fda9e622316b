"""In-memory CardRepository for tests and embedding hosts."""

from lexicard.domain.cards.models import CardState, StoreSnapshot
from lexicard.domain.cards.ports import CardRepository


class InMemoryCardRepository(CardRepository):
    def __init__(self, snapshot: StoreSnapshot | None = None):
        self._snapshot = snapshot.copy() if snapshot is not None else StoreSnapshot()
        self.writes = 0

    def load_all(self) -> StoreSnapshot:
        return self._snapshot.copy()

    def save_one(self, item_id: str, state: CardState) -> None:
        self._snapshot.cards[item_id] = state
        self.writes += 1

    def save_all(self, snapshot: StoreSnapshot) -> None:
        self._snapshot = snapshot.copy()
        self.writes += 1
