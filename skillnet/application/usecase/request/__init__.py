"""Learning request use cases."""

from .create_request import CreateRequestRequest, CreateRequestUseCase
from .expire_requests import (
    ExpireStaleRequestsRequest,
    ExpireStaleRequestsResponse,
    ExpireStaleRequestsUseCase,
)
from .get_request import GetRequestRequest, GetRequestUseCase
from .list_requests import (
    ListOwnRequestsRequest,
    ListOwnRequestsResponse,
    ListOwnRequestsUseCase,
)
from .meeting import GetMeetingResponse, GetMeetingUseCase, StartMeetingUseCase
from .transition_request import (
    ArchiveRequestUseCase,
    CancelRequestUseCase,
    CompleteRequestUseCase,
    PublishRequestUseCase,
    RetractRequestResponse,
    RetractRequestUseCase,
    TransitionRequest,
)
from .views import MeetingView, RequestView, ResponseView

__all__ = [
    "ArchiveRequestUseCase",
    "CancelRequestUseCase",
    "CompleteRequestUseCase",
    "CreateRequestRequest",
    "CreateRequestUseCase",
    "ExpireStaleRequestsRequest",
    "ExpireStaleRequestsResponse",
    "ExpireStaleRequestsUseCase",
    "GetMeetingResponse",
    "GetMeetingUseCase",
    "GetRequestRequest",
    "GetRequestUseCase",
    "ListOwnRequestsRequest",
    "ListOwnRequestsResponse",
    "ListOwnRequestsUseCase",
    "MeetingView",
    "PublishRequestUseCase",
    "RequestView",
    "ResponseView",
    "RetractRequestResponse",
    "RetractRequestUseCase",
    "StartMeetingUseCase",
    "TransitionRequest",
]
