"""Repository interfaces for the SkillNet domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from skillnet.domain.repository.hidden_mark import HiddenMarkRepository
from skillnet.domain.repository.request import RequestRepository
from skillnet.domain.repository.response import ResponseRepository

__all__ = [
    "RequestRepository",
    "ResponseRepository",
    "HiddenMarkRepository",
]
