"""List responses use case."""

from pydantic import BaseModel

from skillnet.application.usecase.base import BaseUseCase, parse_uuid
from skillnet.application.usecase.request.views import ResponseView
from skillnet.domain.service import RequestLifecycleCoordinator
from skillnet.domain.value import RequestId, UserId


class ListResponsesRequest(BaseModel):
    """List responses request."""

    request_id: str
    caller_id: str


class ListResponsesResponse(BaseModel):
    """List responses response."""

    request_id: str
    responses: list[ResponseView]


class ListResponsesUseCase(BaseUseCase):
    """Use case for the owner reviewing responses, newest first."""

    def __init__(self, coordinator: RequestLifecycleCoordinator) -> None:
        self.coordinator = coordinator

    async def execute(self, request: ListResponsesRequest) -> ListResponsesResponse:
        request_id = RequestId(parse_uuid(request.request_id, "request id"))
        caller_id = UserId(parse_uuid(request.caller_id, "caller id"))
        responses = await self.coordinator.list_responses(request_id, caller_id)
        return ListResponsesResponse(
            request_id=str(request_id),
            responses=[ResponseView.from_domain(r) for r in responses],
        )
