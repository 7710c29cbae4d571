"""Meeting use cases."""

from typing import Optional

from pydantic import BaseModel

from skillnet.application.usecase.base import BaseUseCase
from skillnet.application.usecase.request.transition_request import TransitionRequest
from skillnet.application.usecase.request.views import MeetingView, RequestView
from skillnet.domain.service import RequestLifecycleCoordinator


class GetMeetingResponse(BaseModel):
    """Get meeting response."""

    request_id: str
    meeting: Optional[MeetingView] = None


class StartMeetingUseCase(BaseUseCase):
    """Use case for provisioning the meeting of an accepted request."""

    def __init__(self, coordinator: RequestLifecycleCoordinator) -> None:
        self.coordinator = coordinator

    async def execute(self, request: TransitionRequest) -> RequestView:
        """Provision the meeting and activate the request.

        Raises:
            MeetingProvisioningFailedError: Request stays accepted; retry later
        """
        request_id, caller_id = request.ids()
        started = await self.coordinator.start_meeting(request_id, caller_id)
        return RequestView.from_domain(started, caller_id)


class GetMeetingUseCase(BaseUseCase):
    """Use case for a member reading the request's meeting."""

    def __init__(self, coordinator: RequestLifecycleCoordinator) -> None:
        self.coordinator = coordinator

    async def execute(self, request: TransitionRequest) -> GetMeetingResponse:
        request_id, caller_id = request.ids()
        meeting_ref = await self.coordinator.get_meeting(request_id, caller_id)
        return GetMeetingResponse(
            request_id=str(request_id),
            meeting=MeetingView.from_domain(meeting_ref) if meeting_ref else None,
        )
