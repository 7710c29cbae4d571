"""Visibility index: what a viewer may still respond to."""

from typing import AsyncIterator, List, Set

import logfire

from skillnet.domain.model.hidden_mark import HiddenMark
from skillnet.domain.model.request import LearningRequest
from skillnet.domain.repository import HiddenMarkRepository, RequestRepository
from skillnet.domain.value import RequestId, UserId

from .base import Service


class AvailableRequests:
    """Lazy, restartable sequence of requests available to one viewer.

    Each ``async for`` starts a fresh scan: pages are fetched from the
    store on demand, newest first, and the viewer's hidden marks are read
    once per scan. Nothing is written.
    """

    def __init__(
        self,
        request_repository: RequestRepository,
        hidden_mark_repository: HiddenMarkRepository,
        viewer_id: UserId,
        page_size: int,
    ) -> None:
        self._requests = request_repository
        self._hidden_marks = hidden_mark_repository
        self.viewer_id = viewer_id
        self.page_size = page_size

    def __aiter__(self) -> AsyncIterator[LearningRequest]:
        return self._scan()

    async def _scan(self) -> AsyncIterator[LearningRequest]:
        hidden = await self._hidden_marks.find_request_ids_by_viewer(self.viewer_id)
        offset = 0
        while True:
            page = await self._requests.find_available(
                exclude_owner=self.viewer_id, limit=self.page_size, offset=offset
            )
            for request in page:
                if request.id in hidden or self.viewer_id in request.participants:
                    continue
                # The store filters these too; readers may see a stale page
                if request.owner_id == self.viewer_id or request.accepted_by is not None:
                    continue
                yield request
            if len(page) < self.page_size:
                return
            offset += self.page_size

    async def take(self, limit: int, offset: int = 0) -> List[LearningRequest]:
        """Collect one window of the sequence."""
        window: List[LearningRequest] = []
        index = 0
        async for request in self:
            if index >= offset:
                window.append(request)
                if len(window) >= limit:
                    break
            index += 1
        return window


class VisibilityIndex(Service):
    """Derives per-viewer availability from requests and hidden marks."""

    def __init__(
        self,
        request_repository: RequestRepository,
        hidden_mark_repository: HiddenMarkRepository,
        page_size: int = 50,
    ) -> None:
        """Initialize visibility index.

        Args:
            request_repository: Request repository
            hidden_mark_repository: Hidden mark repository
            page_size: Rows fetched per store query while scanning
        """
        self.request_repository = request_repository
        self.hidden_mark_repository = hidden_mark_repository
        self.page_size = page_size

    def available_for(self, viewer_id: UserId) -> AvailableRequests:
        """Requests viewer_id may respond to, newest first.

        Open requests (and group requests still collecting participants)
        not authored by the viewer, without an acceptor, not already joined
        by the viewer and not hidden by the viewer.
        """
        return AvailableRequests(
            self.request_repository,
            self.hidden_mark_repository,
            viewer_id,
            self.page_size,
        )

    async def hidden_for(self, viewer_id: UserId) -> Set[RequestId]:
        """Ids of every request viewer_id has hidden."""
        with logfire.span("visibility.hidden_for", viewer_id=str(viewer_id)):
            return await self.hidden_mark_repository.find_request_ids_by_viewer(
                viewer_id
            )

    async def hide(self, viewer_id: UserId, request_id: RequestId) -> HiddenMark:
        """Hide a request from a viewer. Idempotent."""
        with logfire.span(
            "visibility.hide", viewer_id=str(viewer_id), request_id=str(request_id)
        ):
            mark = await self.hidden_mark_repository.mark(
                HiddenMark(viewer_id=viewer_id, request_id=request_id)
            )
            logfire.info(
                "Request hidden", viewer_id=str(viewer_id), request_id=str(request_id)
            )
            return mark

    async def unhide(self, viewer_id: UserId, request_id: RequestId) -> bool:
        """Make a hidden request eligible for the viewer's listing again.

        Returns:
            True if a mark was removed, False if the request was not hidden
        """
        with logfire.span(
            "visibility.unhide", viewer_id=str(viewer_id), request_id=str(request_id)
        ):
            removed = await self.hidden_mark_repository.delete(viewer_id, request_id)
            logfire.info(
                "Request unhidden" if removed else "Request was not hidden",
                viewer_id=str(viewer_id),
                request_id=str(request_id),
            )
            return removed

    async def purge_request(self, request_id: RequestId) -> int:
        """Drop every viewer's hidden mark on a request that is being deleted."""
        with logfire.span("visibility.purge_request", request_id=str(request_id)):
            return await self.hidden_mark_repository.delete_by_request(request_id)
