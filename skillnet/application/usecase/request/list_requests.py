"""List own learning requests use case."""

from pydantic import BaseModel, Field

from skillnet.application.usecase.base import BaseUseCase, parse_uuid
from skillnet.application.usecase.request.views import RequestView
from skillnet.domain.service import RequestLifecycleCoordinator
from skillnet.domain.value import UserId


class ListOwnRequestsRequest(BaseModel):
    """List own requests request."""

    owner_id: str
    limit: int = Field(default=50, ge=1, le=200)
    offset: int = Field(default=0, ge=0)


class ListOwnRequestsResponse(BaseModel):
    """List own requests response."""

    requests: list[RequestView]


class ListOwnRequestsUseCase(BaseUseCase):
    """Use case for the caller's own requests, newest first."""

    def __init__(self, coordinator: RequestLifecycleCoordinator) -> None:
        self.coordinator = coordinator

    async def execute(self, request: ListOwnRequestsRequest) -> ListOwnRequestsResponse:
        owner_id = UserId(parse_uuid(request.owner_id, "owner id"))
        requests = await self.coordinator.list_requests_by_owner(
            owner_id, limit=request.limit, offset=request.offset
        )
        return ListOwnRequestsResponse(
            requests=[RequestView.from_domain(r, owner_id) for r in requests]
        )
