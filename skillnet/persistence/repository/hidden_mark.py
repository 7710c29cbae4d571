"""PostgreSQL implementation of the hidden mark repository."""

from typing import Set

import logfire
from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert

from skillnet.domain.model import HiddenMark
from skillnet.domain.repository.hidden_mark import HiddenMarkRepository
from skillnet.domain.value import RequestId, UserId
from skillnet.persistence.mappers import hidden_mark_to_dict, row_to_hidden_mark
from skillnet.persistence.repository.base import PostgresRepository
from skillnet.persistence.tables import hidden_marks_table


class PostgresHiddenMarkRepository(PostgresRepository, HiddenMarkRepository):
    """PostgreSQL implementation of HiddenMarkRepository."""

    async def mark(self, hidden_mark: HiddenMark) -> HiddenMark:
        """Record a hidden mark; an existing mark for the pair is kept."""
        with logfire.span(
            "hidden_mark_repository.mark",
            viewer_id=str(hidden_mark.viewer_id),
            request_id=str(hidden_mark.request_id),
        ):
            t = hidden_marks_table
            insert_stmt = (
                insert(t)
                .values(**hidden_mark_to_dict(hidden_mark))
                .on_conflict_do_nothing(constraint="uq_hidden_mark_viewer_request")
            )
            select_stmt = select(t).where(
                t.c.viewer_id == hidden_mark.viewer_id,
                t.c.request_id == hidden_mark.request_id,
            )

            async def work():
                await self.session.execute(insert_stmt)
                result = await self.session.execute(select_stmt)
                return result.fetchone()

            row = await self._run("mark_hidden", work, commit=True)
            return row_to_hidden_mark(row._asdict())

    async def find_request_ids_by_viewer(self, viewer_id: UserId) -> Set[RequestId]:
        """Return the ids of every request hidden for a viewer."""
        with logfire.span(
            "hidden_mark_repository.find_request_ids_by_viewer",
            viewer_id=str(viewer_id),
        ):
            stmt = select(hidden_marks_table.c.request_id).where(
                hidden_marks_table.c.viewer_id == viewer_id
            )

            async def work():
                result = await self.session.execute(stmt)
                return result.scalars().all()

            ids = await self._run("find_hidden", work)
            return {RequestId(request_id) for request_id in ids}

    async def delete(self, viewer_id: UserId, request_id: RequestId) -> bool:
        """Remove one viewer's mark on a request."""
        with logfire.span(
            "hidden_mark_repository.delete",
            viewer_id=str(viewer_id),
            request_id=str(request_id),
        ):
            t = hidden_marks_table
            stmt = delete(t).where(
                t.c.viewer_id == viewer_id, t.c.request_id == request_id
            )

            async def work():
                result = await self.session.execute(stmt)
                return result.rowcount

            deleted = await self._run("unhide", work, commit=True)
            return (deleted or 0) > 0

    async def delete_by_request(self, request_id: RequestId) -> int:
        """Remove every viewer's mark on a request."""
        with logfire.span(
            "hidden_mark_repository.delete_by_request", request_id=str(request_id)
        ):
            stmt = delete(hidden_marks_table).where(
                hidden_marks_table.c.request_id == request_id
            )

            async def work():
                result = await self.session.execute(stmt)
                return result.rowcount

            deleted = await self._run("delete_hidden_marks", work, commit=True)
            return deleted or 0
