"""Submit response use case."""

from typing import Optional

from pydantic import BaseModel, Field

from skillnet.application.usecase.base import BaseUseCase, parse_uuid
from skillnet.application.usecase.request.views import (
    MeetingView,
    RequestView,
    ResponseView,
)
from skillnet.domain.service import RequestLifecycleCoordinator
from skillnet.domain.value import RequestId, ResponseDecision, UserId


class SubmitResponseRequest(BaseModel):
    """Submit response request."""

    request_id: str
    responder_id: str  # User ID from authenticated user
    decision: ResponseDecision
    message: str = Field(default="", max_length=2000)


class SubmitResponseResponse(BaseModel):
    """Submit response response."""

    response: ResponseView
    request: RequestView
    meeting: Optional[MeetingView] = None  # Set when the acceptance started a meeting


class SubmitResponseUseCase(BaseUseCase):
    """Use case for responding to a learning request."""

    def __init__(self, coordinator: RequestLifecycleCoordinator) -> None:
        """Initialize submit response use case.

        Args:
            coordinator: Request lifecycle coordinator
        """
        self.coordinator = coordinator

    async def execute(self, request: SubmitResponseRequest) -> SubmitResponseResponse:
        """Record the decision; acceptances are arbitrated.

        Raises:
            SelfResponseForbiddenError: Responder owns the request
            RequestNotAvailableError: Another acceptance won, or the request
                is full or closed
            MeetingProvisioningFailedError: Acceptance recorded, retry later
        """
        request_id = RequestId(parse_uuid(request.request_id, "request id"))
        responder_id = UserId(parse_uuid(request.responder_id, "responder id"))

        outcome = await self.coordinator.submit_response(
            request_id=request_id,
            responder_id=responder_id,
            decision=request.decision,
            message=request.message,
        )

        request_view = RequestView.from_domain(outcome.request, responder_id)
        return SubmitResponseResponse(
            response=ResponseView.from_domain(outcome.response),
            request=request_view,
            meeting=request_view.meeting,
        )
