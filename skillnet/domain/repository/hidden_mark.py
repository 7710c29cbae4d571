"""Hidden mark repository interface."""

from abc import ABC, abstractmethod
from typing import Set

from skillnet.domain.model.hidden_mark import HiddenMark
from skillnet.domain.value import RequestId, UserId


class HiddenMarkRepository(ABC):
    """Repository for per-viewer hidden marks."""

    @abstractmethod
    async def mark(self, hidden_mark: HiddenMark) -> HiddenMark:
        """Record a hidden mark.

        Idempotent: marking an already hidden pair keeps the existing mark
        and returns it.

        Args:
            hidden_mark: The (viewer, request) pair to hide

        Returns:
            The stored mark
        """
        pass

    @abstractmethod
    async def find_request_ids_by_viewer(self, viewer_id: UserId) -> Set[RequestId]:
        """Return the ids of every request hidden for a viewer."""
        pass

    @abstractmethod
    async def delete(self, viewer_id: UserId, request_id: RequestId) -> bool:
        """Remove one viewer's mark on a request.

        Returns:
            True if a mark was removed, False if none existed
        """
        pass

    @abstractmethod
    async def delete_by_request(self, request_id: RequestId) -> int:
        """Remove every viewer's mark on a request.

        Returns:
            Number of marks removed
        """
        pass
