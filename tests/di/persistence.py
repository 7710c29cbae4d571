"""Mock persistence providers for testing."""

from dishka import Scope, provide

from skillnet.domain.repository import (
    HiddenMarkRepository,
    RequestRepository,
    ResponseRepository,
)
from skillnet.persistence.repository.inmemory import (
    InMemoryHiddenMarkRepository,
    InMemoryRequestRepository,
    InMemoryResponseRepository,
)
from skillnet.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so state survives across the HTTP requests of one API
    test; every test builds a fresh container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_request_repository(
        self, responses: ResponseRepository
    ) -> RequestRepository:
        """Provide in-memory request repository sharing the response store."""
        return InMemoryRequestRepository(responses)

    @provide(scope=Scope.APP)
    def get_response_repository(self) -> ResponseRepository:
        """Provide in-memory response repository."""
        return InMemoryResponseRepository()

    @provide(scope=Scope.APP)
    def get_hidden_mark_repository(self) -> HiddenMarkRepository:
        """Provide in-memory hidden mark repository."""
        return InMemoryHiddenMarkRepository()
