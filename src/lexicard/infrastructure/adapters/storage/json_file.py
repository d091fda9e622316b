"""
JSON File Card Repository: Infrastructure adapter for on-disk state.

Implements CardRepository by keeping the whole state document in one JSON
file. Every save rewrites the file atomically (temp file + rename).
"""

import logging
import os
import tempfile
from pathlib import Path

from lexicard.application.clock import Clock, zone_clock
from lexicard.domain.cards.models import CardState, StoreSnapshot
from lexicard.domain.cards.ports import CardRepository
from lexicard.domain.errors import StorageError

from .document import decode_document, encode_document

logger = logging.getLogger(__name__)


class JsonFileCardRepository(CardRepository):
    """
    Write-through JSON storage.

    Loads the entire file into memory; fine for a learner's vocabulary.
    """

    def __init__(self, path: Path, clock: Clock | None = None):
        """
        Args:
            path: Location of the state document.
            clock: Date used to reset corrupt records; UTC date if not provided.
        """
        self.path = Path(path)
        self._clock = clock or zone_clock()
        self._snapshot = StoreSnapshot()
        self._loaded = False

    def load_all(self) -> StoreSnapshot:
        self._loaded = True
        if not self.path.exists():
            logger.info(f"No state file at {self.path}, starting fresh")
            self._snapshot = StoreSnapshot()
            return self._snapshot.copy()

        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not read {self.path}, starting fresh: {e}")
            self._snapshot = StoreSnapshot()
            return self._snapshot.copy()

        self._snapshot = decode_document(text, self._clock())
        logger.debug(f"Loaded {len(self._snapshot.cards)} card(s) from {self.path}")
        return self._snapshot.copy()

    def save_one(self, item_id: str, state: CardState) -> None:
        # The rest of the document must be known before the file is rewritten
        if not self._loaded:
            self.load_all()
        updated = self._snapshot.copy()
        updated.cards[item_id] = state
        self.save_all(updated)

    def save_all(self, snapshot: StoreSnapshot) -> None:
        updated = snapshot.copy()
        # Only adopt the new state once it is on disk
        self._write(updated)
        self._snapshot = updated
        self._loaded = True

    def _write(self, snapshot: StoreSnapshot) -> None:
        payload = encode_document(snapshot)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {self.path}: {e}") from e
