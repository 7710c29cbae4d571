"""In-memory learning request repository for testing."""

import asyncio
from datetime import datetime
from typing import List, Optional

from skillnet.domain.error import NotFoundError, StoreConflictError, StoreUnavailableError
from skillnet.domain.model import LearningRequest, RequestResponse
from skillnet.domain.repository.request import RequestRepository
from skillnet.domain.repository.response import ResponseRepository
from skillnet.domain.value import (
    MeetingStatus,
    RequestChanges,
    RequestGuard,
    RequestId,
    RequestStatus,
    UserId,
)

_AVAILABLE_STATUSES = (RequestStatus.OPEN, RequestStatus.VOTING_OPEN)


class InMemoryRequestRepository(RequestRepository):
    """In-memory implementation of RequestRepository for testing.

    Compare-and-set runs under a lock so concurrent writers are
    linearised. Setting ``unavailable`` makes every conditional write fail
    as if storage stayed down after retries. Responses written together
    with a request update go to ``responses``.
    """

    def __init__(self, responses: Optional[ResponseRepository] = None) -> None:
        self._requests: dict[RequestId, LearningRequest] = {}
        self._lock = asyncio.Lock()
        self.responses = responses
        self.unavailable = False
        self.cas_attempts = 0

    async def find_by_id(self, request_id: RequestId) -> Optional[LearningRequest]:
        """Find a request by ID."""
        return self._requests.get(request_id)

    async def save(self, request: LearningRequest) -> LearningRequest:
        """Insert a new request."""
        self._requests[request.id] = request
        return request

    def _checked_update(
        self,
        request_id: RequestId,
        guard: RequestGuard,
        changes: RequestChanges,
    ) -> LearningRequest:
        self.cas_attempts += 1
        if self.unavailable:
            raise StoreUnavailableError("compare_and_set: storage unavailable")

        current = self._requests.get(request_id)
        if current is None:
            raise NotFoundError("Request", str(request_id))
        if (
            current.version != guard.version
            or current.status != guard.status
            or current.accepted_by != guard.accepted_by
        ):
            raise StoreConflictError(str(request_id))

        update = changes.model_dump(exclude_none=True, exclude={"response_count_delta"})
        if changes.meeting_ref is not None:
            update["meeting_ref"] = changes.meeting_ref
        update["version"] = current.version + 1
        update["updated_at"] = datetime.now()
        update["response_count"] = current.response_count + changes.response_count_delta

        # Validate through the model so invalid combinations fail loudly
        return LearningRequest.model_validate({**current.model_dump(), **update})

    async def compare_and_set(
        self,
        request_id: RequestId,
        guard: RequestGuard,
        changes: RequestChanges,
    ) -> LearningRequest:
        """Apply changes only if the stored request still matches guard."""
        async with self._lock:
            updated = self._checked_update(request_id, guard, changes)
            self._requests[request_id] = updated
            return updated

    async def compare_and_set_with_response(
        self,
        request_id: RequestId,
        guard: RequestGuard,
        changes: RequestChanges,
        response: RequestResponse,
    ) -> LearningRequest:
        """Apply changes and append response, or do neither."""
        if self.responses is None:
            raise RuntimeError("InMemoryRequestRepository has no response store")
        async with self._lock:
            updated = self._checked_update(request_id, guard, changes)
            # Stored only once the response is in
            await self.responses.append(response)
            self._requests[request_id] = updated
            return updated

    async def increment_response_count(self, request_id: RequestId) -> None:
        """Atomically add one to response_count."""
        current = self._requests.get(request_id)
        if current:
            self._requests[request_id] = current.model_copy(
                update={"response_count": current.response_count + 1}
            )

    async def increment_view_count(self, request_id: RequestId) -> None:
        """Atomically add one to view_count."""
        current = self._requests.get(request_id)
        if current:
            self._requests[request_id] = current.model_copy(
                update={"view_count": current.view_count + 1}
            )

    async def update_meeting_status(
        self, request_id: RequestId, meeting_status: MeetingStatus
    ) -> None:
        """Set the mirrored meeting status if the request has a meeting."""
        current = self._requests.get(request_id)
        if current and current.meeting_ref:
            ref = current.meeting_ref.model_copy(
                update={"meeting_status": meeting_status}
            )
            self._requests[request_id] = current.model_copy(
                update={"meeting_ref": ref}
            )

    def _newest_first(self, requests: List[LearningRequest]) -> List[LearningRequest]:
        return sorted(requests, key=lambda r: r.created_at, reverse=True)

    async def find_available(
        self,
        exclude_owner: UserId,
        limit: int = 50,
        offset: int = 0,
    ) -> List[LearningRequest]:
        """Find requests open to responders, newest first."""
        available = [
            r
            for r in self._requests.values()
            if r.status in _AVAILABLE_STATUSES
            and r.owner_id != exclude_owner
            and r.accepted_by is None
        ]
        return self._newest_first(available)[offset : offset + limit]

    async def find_by_owner(
        self, owner_id: UserId, limit: int = 50, offset: int = 0
    ) -> List[LearningRequest]:
        """Find requests authored by a user, newest first."""
        owned = [r for r in self._requests.values() if r.owner_id == owner_id]
        return self._newest_first(owned)[offset : offset + limit]

    async def find_expirable(
        self, created_before: datetime, limit: int = 100
    ) -> List[LearningRequest]:
        """Find open or voting requests created before the given time."""
        stale = [
            r
            for r in self._requests.values()
            if r.status in _AVAILABLE_STATUSES and r.created_at < created_before
        ]
        return sorted(stale, key=lambda r: r.created_at)[:limit]

    async def delete(self, request_id: RequestId) -> bool:
        """Delete a request."""
        return self._requests.pop(request_id, None) is not None
