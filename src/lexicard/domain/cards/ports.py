"""
Ports (interfaces) for card persistence.

These define the contract that infrastructure adapters must implement.
The card store depends on this abstraction, not on concrete storage.
"""

from abc import ABC, abstractmethod

from .models import CardState, StoreSnapshot


class CardRepository(ABC):
    """
    Port for loading and saving scheduling state.

    Implementations:
        - JsonFileCardRepository: Write-through JSON document on disk.
        - InMemoryCardRepository: Keeps everything in process memory.
    """

    @abstractmethod
    def load_all(self) -> StoreSnapshot:
        """
        Load every persisted card and the learner settings.

        Invalid records must be replaced by a fresh default state rather
        than raising.
        """
        pass

    @abstractmethod
    def save_one(self, item_id: str, state: CardState) -> None:
        """
        Persist the state of a single item.

        Raises:
            StorageError: If the state could not be written.
        """
        pass

    @abstractmethod
    def save_all(self, snapshot: StoreSnapshot) -> None:
        """
        Replace the persisted state wholesale (bulk import or reset).

        Raises:
            StorageError: If the state could not be written.
        """
        pass
