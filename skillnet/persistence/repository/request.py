"""PostgreSQL implementation of the learning request repository."""

from datetime import datetime
from typing import List, Optional

import logfire
from sqlalchemy import delete, insert, select, update

from skillnet.domain.error import NotFoundError, StoreConflictError
from skillnet.domain.model import LearningRequest, RequestResponse
from skillnet.domain.repository.request import RequestRepository
from skillnet.domain.value import (
    MeetingStatus,
    RequestChanges,
    RequestGuard,
    RequestId,
    RequestStatus,
    UserId,
)
from skillnet.persistence.mappers import (
    changes_to_values,
    request_to_dict,
    response_to_dict,
    row_to_request,
)
from skillnet.persistence.repository.base import PostgresRepository
from skillnet.persistence.tables import (
    learning_requests_table,
    request_responses_table,
)

_AVAILABLE_STATUSES = (RequestStatus.OPEN.value, RequestStatus.VOTING_OPEN.value)


class PostgresRequestRepository(PostgresRepository, RequestRepository):
    """PostgreSQL implementation of RequestRepository.

    Compare-and-set is a single ``UPDATE ... WHERE version AND status AND
    accepted_by ... RETURNING``. PostgreSQL row locking linearises
    concurrent writes against the same request: the second writer
    re-evaluates its WHERE clause after the first commits and matches no
    row.
    """

    async def find_by_id(self, request_id: RequestId) -> Optional[LearningRequest]:
        """Find a request by ID."""
        with logfire.span("request_repository.find_by_id", request_id=str(request_id)):
            stmt = select(learning_requests_table).where(
                learning_requests_table.c.id == request_id
            )

            async def work():
                result = await self.session.execute(stmt)
                return result.fetchone()

            row = await self._run("find_by_id", work)
            return row_to_request(row._asdict()) if row else None

    async def save(self, request: LearningRequest) -> LearningRequest:
        """Insert a new request."""
        with logfire.span("request_repository.save", request_id=str(request.id)):
            stmt = (
                insert(learning_requests_table)
                .values(**request_to_dict(request))
                .returning(learning_requests_table)
            )

            async def work():
                result = await self.session.execute(stmt)
                return result.fetchone()

            row = await self._run("save", work, commit=True)
            return row_to_request(row._asdict())

    def _compare_and_set_statement(
        self,
        request_id: RequestId,
        guard: RequestGuard,
        changes: RequestChanges,
    ):
        t = learning_requests_table
        accepted_by_matches = (
            t.c.accepted_by.is_(None)
            if guard.accepted_by is None
            else t.c.accepted_by == guard.accepted_by
        )
        values = changes_to_values(changes)
        values["version"] = t.c.version + 1
        values["updated_at"] = datetime.now()
        if changes.response_count_delta:
            values["response_count"] = t.c.response_count + changes.response_count_delta

        return (
            update(t)
            .where(
                t.c.id == request_id,
                t.c.version == guard.version,
                t.c.status == guard.status.value,
                accepted_by_matches,
            )
            .values(**values)
            .returning(t)
        )

    async def _conflict(
        self, request_id: RequestId, guard: RequestGuard
    ) -> StoreConflictError:
        if await self.find_by_id(request_id) is None:
            raise NotFoundError("Request", str(request_id))
        logfire.warn(
            "Conditional write conflict",
            request_id=str(request_id),
            expected_version=guard.version,
        )
        return StoreConflictError(str(request_id))

    async def compare_and_set(
        self,
        request_id: RequestId,
        guard: RequestGuard,
        changes: RequestChanges,
    ) -> LearningRequest:
        """Apply changes only if the stored request still matches guard."""
        with logfire.span(
            "request_repository.compare_and_set",
            request_id=str(request_id),
            expected_version=guard.version,
            expected_status=guard.status.value,
        ):
            stmt = self._compare_and_set_statement(request_id, guard, changes)

            async def work():
                result = await self.session.execute(stmt)
                return result.fetchone()

            row = await self._run("compare_and_set", work, commit=True)
            if row is None:
                raise await self._conflict(request_id, guard)
            return row_to_request(row._asdict())

    async def compare_and_set_with_response(
        self,
        request_id: RequestId,
        guard: RequestGuard,
        changes: RequestChanges,
        response: RequestResponse,
    ) -> LearningRequest:
        """Apply changes and insert response in one transaction.

        The response is only inserted when the conditional update matched.
        """
        with logfire.span(
            "request_repository.compare_and_set_with_response",
            request_id=str(request_id),
            response_id=str(response.id),
            expected_version=guard.version,
            expected_status=guard.status.value,
        ):
            update_stmt = self._compare_and_set_statement(request_id, guard, changes)
            insert_stmt = insert(request_responses_table).values(
                **response_to_dict(response)
            )

            async def work():
                result = await self.session.execute(update_stmt)
                row = result.fetchone()
                if row is not None:
                    await self.session.execute(insert_stmt)
                return row

            row = await self._run("compare_and_set_with_response", work, commit=True)
            if row is None:
                raise await self._conflict(request_id, guard)
            return row_to_request(row._asdict())

    async def _increment(self, request_id: RequestId, column: str) -> None:
        t = learning_requests_table
        stmt = (
            update(t)
            .where(t.c.id == request_id)
            .values({column: t.c[column] + 1})
        )

        async def work():
            await self.session.execute(stmt)

        await self._run(f"increment_{column}", work, commit=True)

    async def increment_response_count(self, request_id: RequestId) -> None:
        """Atomically add one to response_count."""
        with logfire.span(
            "request_repository.increment_response_count", request_id=str(request_id)
        ):
            await self._increment(request_id, "response_count")

    async def increment_view_count(self, request_id: RequestId) -> None:
        """Atomically add one to view_count."""
        with logfire.span(
            "request_repository.increment_view_count", request_id=str(request_id)
        ):
            await self._increment(request_id, "view_count")

    async def update_meeting_status(
        self, request_id: RequestId, meeting_status: MeetingStatus
    ) -> None:
        """Set the mirrored meeting status if the request has a meeting."""
        with logfire.span(
            "request_repository.update_meeting_status",
            request_id=str(request_id),
            meeting_status=meeting_status.value,
        ):
            t = learning_requests_table
            stmt = (
                update(t)
                .where(t.c.id == request_id, t.c.meeting_id.is_not(None))
                .values(meeting_status=meeting_status.value)
            )

            async def work():
                await self.session.execute(stmt)

            await self._run("update_meeting_status", work, commit=True)

    async def find_available(
        self,
        exclude_owner: UserId,
        limit: int = 50,
        offset: int = 0,
    ) -> List[LearningRequest]:
        """Find requests open to responders, newest first."""
        with logfire.span(
            "request_repository.find_available",
            exclude_owner=str(exclude_owner),
            limit=limit,
            offset=offset,
        ):
            t = learning_requests_table
            stmt = (
                select(t)
                .where(
                    t.c.status.in_(_AVAILABLE_STATUSES),
                    t.c.owner_id != exclude_owner,
                    t.c.accepted_by.is_(None),
                )
                .order_by(t.c.created_at.desc(), t.c.id)
                .limit(limit)
                .offset(offset)
            )

            async def work():
                result = await self.session.execute(stmt)
                return result.fetchall()

            rows = await self._run("find_available", work)
            return [row_to_request(row._asdict()) for row in rows]

    async def find_by_owner(
        self, owner_id: UserId, limit: int = 50, offset: int = 0
    ) -> List[LearningRequest]:
        """Find requests authored by a user, newest first."""
        with logfire.span(
            "request_repository.find_by_owner", owner_id=str(owner_id), limit=limit
        ):
            t = learning_requests_table
            stmt = (
                select(t)
                .where(t.c.owner_id == owner_id)
                .order_by(t.c.created_at.desc(), t.c.id)
                .limit(limit)
                .offset(offset)
            )

            async def work():
                result = await self.session.execute(stmt)
                return result.fetchall()

            rows = await self._run("find_by_owner", work)
            return [row_to_request(row._asdict()) for row in rows]

    async def find_expirable(
        self, created_before: datetime, limit: int = 100
    ) -> List[LearningRequest]:
        """Find open or voting requests created before the given time."""
        with logfire.span(
            "request_repository.find_expirable",
            created_before=created_before.isoformat(),
            limit=limit,
        ):
            t = learning_requests_table
            stmt = (
                select(t)
                .where(
                    t.c.status.in_(_AVAILABLE_STATUSES),
                    t.c.created_at < created_before,
                )
                .order_by(t.c.created_at)
                .limit(limit)
            )

            async def work():
                result = await self.session.execute(stmt)
                return result.fetchall()

            rows = await self._run("find_expirable", work)
            return [row_to_request(row._asdict()) for row in rows]

    async def delete(self, request_id: RequestId) -> bool:
        """Delete a request."""
        with logfire.span("request_repository.delete", request_id=str(request_id)):
            stmt = delete(learning_requests_table).where(
                learning_requests_table.c.id == request_id
            )

            async def work():
                result = await self.session.execute(stmt)
                return result.rowcount

            deleted = await self._run("delete", work, commit=True)
            return (deleted or 0) > 0
