"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from skillnet.config import Settings
from skillnet.domain.repository import (
    HiddenMarkRepository,
    RequestRepository,
    ResponseRepository,
)
from skillnet.persistence.database import create_engine, create_session_factory
from skillnet.persistence.repository import (
    PostgresHiddenMarkRepository,
    PostgresRequestRepository,
    PostgresResponseRepository,
)
from skillnet.util.di.base import ProviderBase
from skillnet.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the app shuts down."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        Repositories commit each write themselves; anything still pending
        when the request ends is committed, or rolled back on error.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_request_repository(
        self, session: AsyncSession, settings: Settings
    ) -> RequestRepository:
        """Provide request repository."""
        return PostgresRequestRepository(session, settings)

    @provide(scope=Scope.REQUEST)
    def get_response_repository(
        self, session: AsyncSession, settings: Settings
    ) -> ResponseRepository:
        """Provide response repository."""
        return PostgresResponseRepository(session, settings)

    @provide(scope=Scope.REQUEST)
    def get_hidden_mark_repository(
        self, session: AsyncSession, settings: Settings
    ) -> HiddenMarkRepository:
        """Provide hidden mark repository."""
        return PostgresHiddenMarkRepository(session, settings)
