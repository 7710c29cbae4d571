"""Infrastructure providers."""

# Import bases
from .meeting import MeetingProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .meeting import ProdMeetingProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "MeetingProvider",
    "PersistenceProvider",
    "ProdMeetingProvider",
    "ProdPersistenceProvider",
]
