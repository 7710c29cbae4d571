"""Response use cases."""

from .list_responses import (
    ListResponsesRequest,
    ListResponsesResponse,
    ListResponsesUseCase,
)
from .submit_response import (
    SubmitResponseRequest,
    SubmitResponseResponse,
    SubmitResponseUseCase,
)

__all__ = [
    "ListResponsesRequest",
    "ListResponsesResponse",
    "ListResponsesUseCase",
    "SubmitResponseRequest",
    "SubmitResponseResponse",
    "SubmitResponseUseCase",
]
