"""In-memory repository implementations for testing."""

from .hidden_mark import InMemoryHiddenMarkRepository
from .request import InMemoryRequestRepository
from .response import InMemoryResponseRepository

__all__ = [
    "InMemoryHiddenMarkRepository",
    "InMemoryRequestRepository",
    "InMemoryResponseRepository",
]
