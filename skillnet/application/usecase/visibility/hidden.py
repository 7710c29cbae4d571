"""Hidden request use cases."""

from pydantic import BaseModel

from skillnet.application.usecase.base import BaseUseCase, parse_uuid
from skillnet.domain.service import VisibilityIndex
from skillnet.domain.value import RequestId, UserId


class ListHiddenRequest(BaseModel):
    """List hidden requests request."""

    viewer_id: str


class ListHiddenResponse(BaseModel):
    """List hidden requests response."""

    request_ids: list[str]


class UnhideRequest(BaseModel):
    """Unhide request request."""

    viewer_id: str
    request_id: str


class UnhideResponse(BaseModel):
    """Unhide request response."""

    request_id: str
    unhidden: bool


class ListHiddenRequestsUseCase(BaseUseCase):
    """Use case for the ids a viewer has hidden."""

    def __init__(self, visibility_index: VisibilityIndex) -> None:
        self.visibility_index = visibility_index

    async def execute(self, request: ListHiddenRequest) -> ListHiddenResponse:
        viewer_id = UserId(parse_uuid(request.viewer_id, "viewer id"))
        hidden = await self.visibility_index.hidden_for(viewer_id)
        return ListHiddenResponse(request_ids=sorted(str(r) for r in hidden))


class UnhideRequestUseCase(BaseUseCase):
    """Use case for bringing a hidden request back into a viewer's listing."""

    def __init__(self, visibility_index: VisibilityIndex) -> None:
        self.visibility_index = visibility_index

    async def execute(self, request: UnhideRequest) -> UnhideResponse:
        viewer_id = UserId(parse_uuid(request.viewer_id, "viewer id"))
        request_id = RequestId(parse_uuid(request.request_id, "request id"))
        removed = await self.visibility_index.unhide(viewer_id, request_id)
        return UnhideResponse(request_id=str(request_id), unhidden=removed)
