"""Learning request repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from skillnet.domain.model.request import LearningRequest
from skillnet.domain.model.response import RequestResponse
from skillnet.domain.value import (
    MeetingStatus,
    RequestChanges,
    RequestGuard,
    RequestId,
    UserId,
)


class RequestRepository(ABC):
    """Repository for the LearningRequest aggregate.

    Status-changing writes go through ``compare_and_set`` or
    ``compare_and_set_with_response`` only. Counter
    increments are advisory and never conditional.
    """

    @abstractmethod
    async def find_by_id(self, request_id: RequestId) -> Optional[LearningRequest]:
        """Find a request by ID.

        Args:
            request_id: The request's unique identifier

        Returns:
            The request if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, request: LearningRequest) -> LearningRequest:
        """Insert a new request.

        Args:
            request: The request to insert

        Returns:
            The stored request
        """
        pass

    @abstractmethod
    async def compare_and_set(
        self,
        request_id: RequestId,
        guard: RequestGuard,
        changes: RequestChanges,
    ) -> LearningRequest:
        """Apply changes only if the stored request still matches guard.

        On success the stored version is incremented by one and updated_at
        refreshed.

        Args:
            request_id: Request to update
            guard: Expected version, status and acceptor
            changes: Fields to write

        Returns:
            The request as stored after the write

        Raises:
            NotFoundError: If the request does not exist
            StoreConflictError: If the stored request no longer matches guard
            StoreUnavailableError: If storage stayed unavailable after retries
        """
        pass

    @abstractmethod
    async def compare_and_set_with_response(
        self,
        request_id: RequestId,
        guard: RequestGuard,
        changes: RequestChanges,
        response: RequestResponse,
    ) -> LearningRequest:
        """Conditionally update a request and append a response atomically.

        Either both the request update and the response insert are
        persisted, or neither is.

        Raises:
            NotFoundError: If the request does not exist
            StoreConflictError: If the stored request no longer matches guard
            StoreUnavailableError: If storage stayed unavailable after retries
        """
        pass

    @abstractmethod
    async def increment_response_count(self, request_id: RequestId) -> None:
        """Atomically add one to response_count."""
        pass

    @abstractmethod
    async def increment_view_count(self, request_id: RequestId) -> None:
        """Atomically add one to view_count."""
        pass

    @abstractmethod
    async def update_meeting_status(
        self, request_id: RequestId, meeting_status: MeetingStatus
    ) -> None:
        """Set the mirrored status of the request's meeting, if it has one."""
        pass

    @abstractmethod
    async def find_available(
        self,
        exclude_owner: UserId,
        limit: int = 50,
        offset: int = 0,
    ) -> List[LearningRequest]:
        """Find requests open to responders, newest first.

        Returns open requests, and group requests still collecting
        participants, that are not owned by exclude_owner and carry no
        acceptor.

        Args:
            exclude_owner: Viewer whose own requests are skipped
            limit: Maximum number of requests to return
            offset: Number of requests to skip

        Returns:
            A page of requests ordered by created_at descending
        """
        pass

    @abstractmethod
    async def find_by_owner(
        self, owner_id: UserId, limit: int = 50, offset: int = 0
    ) -> List[LearningRequest]:
        """Find requests authored by a user, newest first."""
        pass

    @abstractmethod
    async def find_expirable(
        self, created_before: datetime, limit: int = 100
    ) -> List[LearningRequest]:
        """Find open or voting requests created before the given time."""
        pass

    @abstractmethod
    async def delete(self, request_id: RequestId) -> bool:
        """Delete a request.

        Returns:
            True if a request was deleted, False if none existed
        """
        pass
