from datetime import date

import pytest

from lexicard.application.card_store import CardStore
from lexicard.application.service import ReviewService
from lexicard.infrastructure.adapters.storage import InMemoryCardRepository

TODAY = date(2026, 3, 15)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def clock(today):
    return lambda: today


@pytest.fixture
def memory_repo():
    return InMemoryCardRepository()


@pytest.fixture
def store(memory_repo):
    return CardStore(memory_repo)


@pytest.fixture
def service(store, clock):
    return ReviewService(store, clock=clock)


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config and state files
    monkeypatch.setenv("HOME", str(home))
    return home
