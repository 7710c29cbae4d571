"""PostgreSQL repository implementations."""

from skillnet.persistence.repository.hidden_mark import PostgresHiddenMarkRepository
from skillnet.persistence.repository.request import PostgresRequestRepository
from skillnet.persistence.repository.response import PostgresResponseRepository

__all__ = [
    "PostgresRequestRepository",
    "PostgresResponseRepository",
    "PostgresHiddenMarkRepository",
]
