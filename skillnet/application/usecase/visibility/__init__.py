"""Visibility use cases."""

from .hidden import (
    ListHiddenRequest,
    ListHiddenRequestsUseCase,
    ListHiddenResponse,
    UnhideRequest,
    UnhideRequestUseCase,
    UnhideResponse,
)
from .list_available import (
    ListAvailableRequest,
    ListAvailableRequestsUseCase,
    ListAvailableResponse,
)

__all__ = [
    "ListAvailableRequest",
    "ListAvailableRequestsUseCase",
    "ListAvailableResponse",
    "ListHiddenRequest",
    "ListHiddenRequestsUseCase",
    "ListHiddenResponse",
    "UnhideRequest",
    "UnhideRequestUseCase",
    "UnhideResponse",
]
