"""Lifecycle transition use cases.

Publish, cancel, complete and archive all take a request and the caller
and return the request as stored afterwards.
"""

from pydantic import BaseModel

from skillnet.application.usecase.base import BaseUseCase, parse_uuid
from skillnet.application.usecase.request.views import RequestView
from skillnet.domain.service import RequestLifecycleCoordinator
from skillnet.domain.value import RequestId, UserId


class TransitionRequest(BaseModel):
    """Transition request."""

    request_id: str
    caller_id: str  # User ID from authenticated user

    def ids(self) -> tuple[RequestId, UserId]:
        return (
            RequestId(parse_uuid(self.request_id, "request id")),
            UserId(parse_uuid(self.caller_id, "caller id")),
        )


class PublishRequestUseCase(BaseUseCase):
    """Use case for publishing a draft."""

    def __init__(self, coordinator: RequestLifecycleCoordinator) -> None:
        self.coordinator = coordinator

    async def execute(self, request: TransitionRequest) -> RequestView:
        request_id, caller_id = request.ids()
        published = await self.coordinator.publish(request_id, caller_id)
        return RequestView.from_domain(published, caller_id)


class CancelRequestUseCase(BaseUseCase):
    """Use case for cancelling an unaccepted request."""

    def __init__(self, coordinator: RequestLifecycleCoordinator) -> None:
        self.coordinator = coordinator

    async def execute(self, request: TransitionRequest) -> RequestView:
        request_id, caller_id = request.ids()
        cancelled = await self.coordinator.cancel(request_id, caller_id)
        return RequestView.from_domain(cancelled, caller_id)


class CompleteRequestUseCase(BaseUseCase):
    """Use case for completing an accepted or active request."""

    def __init__(self, coordinator: RequestLifecycleCoordinator) -> None:
        self.coordinator = coordinator

    async def execute(self, request: TransitionRequest) -> RequestView:
        request_id, caller_id = request.ids()
        completed = await self.coordinator.complete(request_id, caller_id)
        return RequestView.from_domain(completed, caller_id)


class ArchiveRequestUseCase(BaseUseCase):
    """Use case for archiving a request."""

    def __init__(self, coordinator: RequestLifecycleCoordinator) -> None:
        self.coordinator = coordinator

    async def execute(self, request: TransitionRequest) -> RequestView:
        request_id, caller_id = request.ids()
        archived = await self.coordinator.archive(request_id, caller_id)
        return RequestView.from_domain(archived, caller_id)


class RetractRequestResponse(BaseModel):
    """Retract request response."""

    request_id: str
    deleted: bool


class RetractRequestUseCase(BaseUseCase):
    """Use case for deleting a request with everything attached to it."""

    def __init__(self, coordinator: RequestLifecycleCoordinator) -> None:
        self.coordinator = coordinator

    async def execute(self, request: TransitionRequest) -> RetractRequestResponse:
        request_id, caller_id = request.ids()
        await self.coordinator.retract(request_id, caller_id)
        return RetractRequestResponse(request_id=str(request_id), deleted=True)
