"""In-memory response repository for testing."""

from typing import List, Optional

from skillnet.domain.model import RequestResponse
from skillnet.domain.repository.response import ResponseRepository
from skillnet.domain.value import MeetingRef, RequestId, ResponseId


class InMemoryResponseRepository(ResponseRepository):
    """In-memory implementation of ResponseRepository for testing."""

    def __init__(self) -> None:
        self._responses: list[RequestResponse] = []

    async def append(self, response: RequestResponse) -> RequestResponse:
        """Store a new response."""
        self._responses.append(response)
        return response

    async def find_by_id(self, response_id: ResponseId) -> Optional[RequestResponse]:
        """Find a response by ID."""
        for response in self._responses:
            if response.id == response_id:
                return response
        return None

    async def find_by_request(self, request_id: RequestId) -> List[RequestResponse]:
        """Find all responses for a request, oldest first."""
        return [r for r in self._responses if r.request_id == request_id]

    async def set_meeting_ref(
        self, response_id: ResponseId, meeting_ref: MeetingRef
    ) -> None:
        """Mirror the request's meeting reference onto a response."""
        for index, response in enumerate(self._responses):
            if response.id == response_id:
                self._responses[index] = response.model_copy(
                    update={"meeting_ref": meeting_ref}
                )
                return

    async def delete_by_request(self, request_id: RequestId) -> int:
        """Delete every response for a request."""
        before = len(self._responses)
        self._responses = [r for r in self._responses if r.request_id != request_id]
        return before - len(self._responses)
