"""Persistence adapters."""

from hunt_tracker.adapters.persistence.in_memory_repository import InMemoryRepository
from hunt_tracker.adapters.persistence.json_file_repository import JsonFileRepository

__all__ = ["InMemoryRepository", "JsonFileRepository"]
