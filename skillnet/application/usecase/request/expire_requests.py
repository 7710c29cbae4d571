"""Expire stale requests use case."""

from datetime import timedelta

from pydantic import BaseModel, Field

from skillnet.application.usecase.base import BaseUseCase
from skillnet.domain.service import RequestLifecycleCoordinator


class ExpireStaleRequestsRequest(BaseModel):
    """Expire stale requests request."""

    older_than_hours: float = Field(gt=0)
    batch_size: int = Field(default=100, ge=1)


class ExpireStaleRequestsResponse(BaseModel):
    """Expire stale requests response."""

    expired: int


class ExpireStaleRequestsUseCase(BaseUseCase):
    """Use case for the scheduled expiry sweep."""

    def __init__(self, coordinator: RequestLifecycleCoordinator) -> None:
        self.coordinator = coordinator

    async def execute(
        self, request: ExpireStaleRequestsRequest
    ) -> ExpireStaleRequestsResponse:
        expired = await self.coordinator.expire_stale(
            timedelta(hours=request.older_than_hours), batch_size=request.batch_size
        )
        return ExpireStaleRequestsResponse(expired=expired)
