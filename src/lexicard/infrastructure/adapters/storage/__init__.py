# Infrastructure Storage Adapters Package
from .json_file import JsonFileCardRepository
from .memory import InMemoryCardRepository

__all__ = ["JsonFileCardRepository", "InMemoryCardRepository"]
