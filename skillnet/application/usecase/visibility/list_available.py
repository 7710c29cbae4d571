"""List available requests use case."""

from pydantic import BaseModel, Field

from skillnet.application.usecase.base import BaseUseCase, parse_uuid
from skillnet.application.usecase.request.views import RequestView
from skillnet.domain.service import VisibilityIndex
from skillnet.domain.value import UserId


class ListAvailableRequest(BaseModel):
    """List available requests request."""

    viewer_id: str
    limit: int = Field(default=30, ge=1, le=200)
    offset: int = Field(default=0, ge=0)


class ListAvailableResponse(BaseModel):
    """List available requests response."""

    requests: list[RequestView]
    has_more: bool


class ListAvailableRequestsUseCase(BaseUseCase):
    """Use case for the requests a viewer can still respond to."""

    def __init__(self, visibility_index: VisibilityIndex) -> None:
        """Initialize list available use case.

        Args:
            visibility_index: Visibility index domain service
        """
        self.visibility_index = visibility_index

    async def execute(self, request: ListAvailableRequest) -> ListAvailableResponse:
        """Return one page of available requests, newest first."""
        viewer_id = UserId(parse_uuid(request.viewer_id, "viewer id"))
        available = self.visibility_index.available_for(viewer_id)

        # One extra row tells whether another page exists
        window = await available.take(request.limit + 1, offset=request.offset)
        return ListAvailableResponse(
            requests=[RequestView.from_domain(r, viewer_id) for r in window[: request.limit]],
            has_more=len(window) > request.limit,
        )
