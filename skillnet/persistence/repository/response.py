"""PostgreSQL implementation of the response repository."""

from typing import List, Optional

import logfire
from sqlalchemy import delete, insert, select, update

from skillnet.domain.model import RequestResponse
from skillnet.domain.repository.response import ResponseRepository
from skillnet.domain.value import MeetingRef, RequestId, ResponseId
from skillnet.persistence.mappers import response_to_dict, row_to_response
from skillnet.persistence.repository.base import PostgresRepository
from skillnet.persistence.tables import request_responses_table


class PostgresResponseRepository(PostgresRepository, ResponseRepository):
    """PostgreSQL implementation of ResponseRepository."""

    async def append(self, response: RequestResponse) -> RequestResponse:
        """Store a new response."""
        with logfire.span(
            "response_repository.append",
            response_id=str(response.id),
            request_id=str(response.request_id),
            decision=response.decision.value,
        ):
            stmt = (
                insert(request_responses_table)
                .values(**response_to_dict(response))
                .returning(request_responses_table)
            )

            async def work():
                result = await self.session.execute(stmt)
                return result.fetchone()

            row = await self._run("append_response", work, commit=True)
            return row_to_response(row._asdict())

    async def find_by_id(self, response_id: ResponseId) -> Optional[RequestResponse]:
        """Find a response by ID."""
        with logfire.span(
            "response_repository.find_by_id", response_id=str(response_id)
        ):
            stmt = select(request_responses_table).where(
                request_responses_table.c.id == response_id
            )

            async def work():
                result = await self.session.execute(stmt)
                return result.fetchone()

            row = await self._run("find_response", work)
            return row_to_response(row._asdict()) if row else None

    async def find_by_request(self, request_id: RequestId) -> List[RequestResponse]:
        """Find all responses for a request, oldest first."""
        with logfire.span(
            "response_repository.find_by_request", request_id=str(request_id)
        ):
            t = request_responses_table
            stmt = (
                select(t)
                .where(t.c.request_id == request_id)
                .order_by(t.c.created_at, t.c.id)
            )

            async def work():
                result = await self.session.execute(stmt)
                return result.fetchall()

            rows = await self._run("find_responses", work)
            return [row_to_response(row._asdict()) for row in rows]

    async def set_meeting_ref(
        self, response_id: ResponseId, meeting_ref: MeetingRef
    ) -> None:
        """Mirror the request's meeting reference onto a response."""
        with logfire.span(
            "response_repository.set_meeting_ref", response_id=str(response_id)
        ):
            stmt = (
                update(request_responses_table)
                .where(request_responses_table.c.id == response_id)
                .values(
                    meeting_id=meeting_ref.meeting_id,
                    meeting_join_url=meeting_ref.join_url,
                    meeting_status=meeting_ref.meeting_status.value,
                )
            )

            async def work():
                await self.session.execute(stmt)

            await self._run("set_meeting_ref", work, commit=True)

    async def delete_by_request(self, request_id: RequestId) -> int:
        """Delete every response for a request."""
        with logfire.span(
            "response_repository.delete_by_request", request_id=str(request_id)
        ):
            stmt = delete(request_responses_table).where(
                request_responses_table.c.request_id == request_id
            )

            async def work():
                result = await self.session.execute(stmt)
                return result.rowcount

            deleted = await self._run("delete_responses", work, commit=True)
            return deleted or 0
