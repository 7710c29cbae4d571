"""Unit tests for visibility use cases."""

from datetime import datetime, timedelta

import pytest

from skillnet.application.usecase.visibility import (
    ListAvailableRequest,
    ListAvailableRequestsUseCase,
    ListHiddenRequest,
    ListHiddenRequestsUseCase,
    UnhideRequest,
    UnhideRequestUseCase,
)
from skillnet.domain.repository import RequestRepository
from skillnet.domain.service import RequestLifecycleCoordinator
from skillnet.domain.value import ResponseDecision
from tests.conftest import make_request, new_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestListAvailableRequestsUseCase:
    """Tests for ListAvailableRequestsUseCase."""

    @pytest.mark.asyncio
    async def test_pages_with_has_more(self, unit_env):
        repo = await unit_env.get(RequestRepository)
        use_case = await unit_env.get(ListAvailableRequestsUseCase)
        start = datetime.now() - timedelta(hours=1)
        for i in range(3):
            await repo.save(make_request(created_at=start + timedelta(minutes=i)))
        viewer = str(new_user())

        first = await use_case.execute(ListAvailableRequest(viewer_id=viewer, limit=2))
        second = await use_case.execute(
            ListAvailableRequest(viewer_id=viewer, limit=2, offset=2)
        )

        assert len(first.requests) == 2
        assert first.has_more is True
        assert len(second.requests) == 1
        assert second.has_more is False


class TestHiddenRequestUseCases:
    """Tests for listing and unhiding hidden requests."""

    @pytest.mark.asyncio
    async def test_not_interested_then_unhide(self, unit_env):
        repo = await unit_env.get(RequestRepository)
        coordinator = await unit_env.get(RequestLifecycleCoordinator)
        list_hidden = await unit_env.get(ListHiddenRequestsUseCase)
        unhide = await unit_env.get(UnhideRequestUseCase)
        list_available = await unit_env.get(ListAvailableRequestsUseCase)
        request = await repo.save(make_request())
        viewer = new_user()
        await coordinator.submit_response(
            request.id, viewer, ResponseDecision.NOT_INTERESTED
        )

        hidden = await list_hidden.execute(ListHiddenRequest(viewer_id=str(viewer)))
        assert hidden.request_ids == [str(request.id)]
        feed = await list_available.execute(ListAvailableRequest(viewer_id=str(viewer)))
        assert feed.requests == []

        result = await unhide.execute(
            UnhideRequest(viewer_id=str(viewer), request_id=str(request.id))
        )
        assert result.unhidden is True
        feed = await list_available.execute(ListAvailableRequest(viewer_id=str(viewer)))
        assert [r.request_id for r in feed.requests] == [str(request.id)]
