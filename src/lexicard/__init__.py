"""lexicard: SM-2 review scheduling for vocabulary tutors."""

from lexicard.application.card_store import CardStore
from lexicard.application.factory import create_review_service
from lexicard.application.scheduling import ReviewButton, advance, quality_from_percentage
from lexicard.application.service import ReviewService
from lexicard.application.session import ReviewSession
from lexicard.domain.cards.models import CardState
from lexicard.domain.errors import LexicardError, SessionFinishedError, StorageError

__version__ = "0.1.0"

__all__ = [
    "CardState",
    "CardStore",
    "LexicardError",
    "ReviewButton",
    "ReviewService",
    "ReviewSession",
    "SessionFinishedError",
    "StorageError",
    "advance",
    "create_review_service",
    "quality_from_percentage",
]
