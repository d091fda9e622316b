"""
Review Service Factory
Centralizes the logic for selecting the storage adapter and wiring the service.
"""

from lexicard.application.card_store import CardStore
from lexicard.application.clock import zone_clock
from lexicard.application.config import AppConfig, resolve_config
from lexicard.application.log_setup import configure_logging
from lexicard.application.service import ReviewService
from lexicard.domain.cards.ports import CardRepository
from lexicard.infrastructure.adapters.storage import (
    InMemoryCardRepository,
    JsonFileCardRepository,
)


def get_card_repository(config: AppConfig) -> CardRepository:
    """
    Returns the CardRepository implementation selected by config.
    """
    if config.backend == "memory":
        return InMemoryCardRepository()

    return JsonFileCardRepository(config.data_file, clock=zone_clock(config.timezone))


def create_review_service(config: AppConfig | None = None) -> ReviewService:
    """
    Build a ready-to-use ReviewService: logging, storage, store, clock.
    """
    config = config or resolve_config()
    configure_logging(config.verbose)

    store = CardStore.open(get_card_repository(config))
    return ReviewService(
        store,
        clock=zone_clock(config.timezone),
        session_size=config.session_size,
    )
