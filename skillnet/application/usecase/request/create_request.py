"""Create learning request use case."""

from typing import Optional

from pydantic import BaseModel

from skillnet.application.usecase.base import BaseUseCase, parse_uuid
from skillnet.application.usecase.request.views import RequestView
from skillnet.domain.service import RequestLifecycleCoordinator
from skillnet.domain.value import RequestKind, UserId


class CreateRequestRequest(BaseModel):
    """Create request request."""

    owner_id: str  # User ID from authenticated user
    kind: RequestKind
    title: str
    topic: str = ""
    description: str = ""
    subject: str = ""
    max_participants: Optional[int] = None  # Group only
    draft: bool = True


class CreateRequestUseCase(BaseUseCase):
    """Use case for posting a new learning request."""

    def __init__(self, coordinator: RequestLifecycleCoordinator) -> None:
        """Initialize create request use case.

        Args:
            coordinator: Request lifecycle coordinator
        """
        self.coordinator = coordinator

    async def execute(self, request: CreateRequestRequest) -> RequestView:
        """Create the request as a draft, or open it straight away.

        Raises:
            ValidationError: Invalid fields, or missing topic/subject for an
                immediately published request
        """
        owner_id = UserId(parse_uuid(request.owner_id, "owner id"))
        created = await self.coordinator.create_request(
            owner_id=owner_id,
            kind=request.kind,
            title=request.title,
            topic=request.topic,
            description=request.description,
            subject=request.subject,
            max_participants=request.max_participants,
            draft=request.draft,
        )
        return RequestView.from_domain(created, owner_id)
