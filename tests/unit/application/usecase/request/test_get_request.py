"""Unit tests for GetRequestUseCase."""

import pytest

from skillnet.application.usecase.request import GetRequestRequest, GetRequestUseCase
from skillnet.domain.error import NotFoundError
from skillnet.domain.repository import RequestRepository
from skillnet.domain.service import RequestLifecycleCoordinator
from skillnet.domain.value import ResponseDecision
from tests.conftest import make_request, new_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetRequestUseCase:
    """Tests for GetRequestUseCase."""

    @pytest.mark.asyncio
    async def test_counts_view_for_other_users(self, unit_env):
        repo = await unit_env.get(RequestRepository)
        use_case = await unit_env.get(GetRequestUseCase)
        request = await repo.save(make_request())

        view = await use_case.execute(
            GetRequestRequest(request_id=str(request.id), viewer_id=str(new_user()))
        )

        assert view.view_count == 1

    @pytest.mark.asyncio
    async def test_anonymous_view_not_counted(self, unit_env):
        repo = await unit_env.get(RequestRepository)
        use_case = await unit_env.get(GetRequestUseCase)
        request = await repo.save(make_request())

        view = await use_case.execute(GetRequestRequest(request_id=str(request.id)))

        assert view.view_count == 0

    @pytest.mark.asyncio
    async def test_meeting_shown_to_members_only(self, unit_env):
        repo = await unit_env.get(RequestRepository)
        coordinator = await unit_env.get(RequestLifecycleCoordinator)
        use_case = GetRequestUseCase(coordinator=coordinator)
        owner = new_user()
        request = await repo.save(make_request(owner_id=owner))
        await coordinator.submit_response(
            request.id, new_user(), ResponseDecision.ACCEPTED
        )

        as_owner = await use_case.execute(
            GetRequestRequest(request_id=str(request.id), viewer_id=str(owner))
        )
        as_stranger = await use_case.execute(
            GetRequestRequest(request_id=str(request.id), viewer_id=str(new_user()))
        )

        assert as_owner.meeting is not None
        assert as_owner.meeting.join_url.startswith("https://")
        assert as_stranger.meeting is None

    @pytest.mark.asyncio
    async def test_unknown_request(self, unit_env):
        use_case = await unit_env.get(GetRequestUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetRequestRequest(request_id=str(make_request().id)))
