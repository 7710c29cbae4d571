"""Get learning request use case."""

from typing import Optional

from pydantic import BaseModel

from skillnet.application.usecase.base import BaseUseCase, parse_uuid
from skillnet.application.usecase.request.views import RequestView
from skillnet.domain.service import RequestLifecycleCoordinator
from skillnet.domain.value import RequestId, UserId


class GetRequestRequest(BaseModel):
    """Get request request."""

    request_id: str
    viewer_id: Optional[str] = None  # Authenticated caller, if any
    record_view: bool = True


class GetRequestUseCase(BaseUseCase):
    """Use case for reading one request and counting the view."""

    def __init__(self, coordinator: RequestLifecycleCoordinator) -> None:
        self.coordinator = coordinator

    async def execute(self, request: GetRequestRequest) -> RequestView:
        request_id = RequestId(parse_uuid(request.request_id, "request id"))
        viewer_id = (
            UserId(parse_uuid(request.viewer_id, "viewer id"))
            if request.viewer_id
            else None
        )

        if viewer_id is not None and request.record_view:
            await self.coordinator.record_view(request_id, viewer_id)

        learning_request = await self.coordinator.get_request(request_id)
        return RequestView.from_domain(learning_request, viewer_id)
