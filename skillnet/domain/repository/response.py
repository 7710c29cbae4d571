"""Response repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from skillnet.domain.model.response import RequestResponse
from skillnet.domain.value import MeetingRef, RequestId, ResponseId


class ResponseRepository(ABC):
    """Repository for RequestResponse entities.

    Responses are append-only.
    """

    @abstractmethod
    async def append(self, response: RequestResponse) -> RequestResponse:
        """Store a new response.

        Args:
            response: The response to store

        Returns:
            The stored response
        """
        pass

    @abstractmethod
    async def find_by_id(self, response_id: ResponseId) -> Optional[RequestResponse]:
        """Find a response by ID."""
        pass

    @abstractmethod
    async def find_by_request(self, request_id: RequestId) -> List[RequestResponse]:
        """Find all responses for a request, oldest first."""
        pass

    @abstractmethod
    async def set_meeting_ref(
        self, response_id: ResponseId, meeting_ref: MeetingRef
    ) -> None:
        """Mirror the request's meeting reference onto a response."""
        pass

    @abstractmethod
    async def delete_by_request(self, request_id: RequestId) -> int:
        """Delete every response for a request.

        Returns:
            Number of responses deleted
        """
        pass
