"""In-memory hidden mark repository for testing."""

from typing import Set

from skillnet.domain.model import HiddenMark
from skillnet.domain.repository.hidden_mark import HiddenMarkRepository
from skillnet.domain.value import RequestId, UserId


class InMemoryHiddenMarkRepository(HiddenMarkRepository):
    """In-memory implementation of HiddenMarkRepository for testing."""

    def __init__(self) -> None:
        self._marks: dict[tuple[UserId, RequestId], HiddenMark] = {}

    async def mark(self, hidden_mark: HiddenMark) -> HiddenMark:
        """Record a hidden mark; an existing mark for the pair is kept."""
        key = (hidden_mark.viewer_id, hidden_mark.request_id)
        return self._marks.setdefault(key, hidden_mark)

    async def find_request_ids_by_viewer(self, viewer_id: UserId) -> Set[RequestId]:
        """Return the ids of every request hidden for a viewer."""
        return {request_id for viewer, request_id in self._marks if viewer == viewer_id}

    async def delete(self, viewer_id: UserId, request_id: RequestId) -> bool:
        """Remove one viewer's mark on a request."""
        return self._marks.pop((viewer_id, request_id), None) is not None

    async def delete_by_request(self, request_id: RequestId) -> int:
        """Remove every viewer's mark on a request."""
        keys = [key for key in self._marks if key[1] == request_id]
        for key in keys:
            del self._marks[key]
        return len(keys)
