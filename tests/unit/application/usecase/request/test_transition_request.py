"""Unit tests for lifecycle transition use cases."""

import pytest

from skillnet.application.usecase.request import (
    CancelRequestUseCase,
    CompleteRequestUseCase,
    ExpireStaleRequestsRequest,
    ExpireStaleRequestsUseCase,
    GetMeetingUseCase,
    PublishRequestUseCase,
    RetractRequestUseCase,
    StartMeetingUseCase,
    TransitionRequest,
)
from skillnet.domain.error import NotFoundError, NotOwnerError, ValidationError
from skillnet.domain.repository import RequestRepository
from skillnet.domain.service import RequestLifecycleCoordinator
from skillnet.domain.value import MeetingStatus, RequestStatus, ResponseDecision
from tests.conftest import make_request, new_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestTransitionUseCases:
    """Tests for publish, cancel, complete and retract."""

    @pytest.mark.asyncio
    async def test_publish(self, unit_env):
        repo = await unit_env.get(RequestRepository)
        use_case = await unit_env.get(PublishRequestUseCase)
        owner = new_user()
        draft = await repo.save(make_request(owner_id=owner, status=RequestStatus.DRAFT))

        view = await use_case.execute(
            TransitionRequest(request_id=str(draft.id), caller_id=str(owner))
        )

        assert view.status == RequestStatus.OPEN

    @pytest.mark.asyncio
    async def test_cancel_by_stranger(self, unit_env):
        repo = await unit_env.get(RequestRepository)
        use_case = await unit_env.get(CancelRequestUseCase)
        request = await repo.save(make_request())

        with pytest.raises(NotOwnerError):
            await use_case.execute(
                TransitionRequest(request_id=str(request.id), caller_id=str(new_user()))
            )

    @pytest.mark.asyncio
    async def test_complete_reports_ended_meeting(self, unit_env):
        repo = await unit_env.get(RequestRepository)
        coordinator = await unit_env.get(RequestLifecycleCoordinator)
        use_case = await unit_env.get(CompleteRequestUseCase)
        owner = new_user()
        request = await repo.save(make_request(owner_id=owner))
        await coordinator.submit_response(
            request.id, new_user(), ResponseDecision.ACCEPTED
        )

        view = await use_case.execute(
            TransitionRequest(request_id=str(request.id), caller_id=str(owner))
        )

        assert view.status == RequestStatus.COMPLETED
        assert view.meeting.meeting_status == MeetingStatus.ENDED

    @pytest.mark.asyncio
    async def test_retract(self, unit_env):
        repo = await unit_env.get(RequestRepository)
        use_case = await unit_env.get(RetractRequestUseCase)
        owner = new_user()
        request = await repo.save(make_request(owner_id=owner))

        result = await use_case.execute(
            TransitionRequest(request_id=str(request.id), caller_id=str(owner))
        )

        assert result.deleted is True
        assert await repo.find_by_id(request.id) is None

    @pytest.mark.asyncio
    async def test_malformed_request_id(self, unit_env):
        use_case = await unit_env.get(PublishRequestUseCase)

        with pytest.raises(ValidationError, match="request id"):
            await use_case.execute(
                TransitionRequest(request_id="42", caller_id=str(new_user()))
            )


class TestMeetingUseCases:
    """Tests for starting and reading meetings."""

    @pytest.mark.asyncio
    async def test_start_then_get_meeting(self, unit_env):
        repo = await unit_env.get(RequestRepository)
        coordinator = await unit_env.get(RequestLifecycleCoordinator)
        coordinator.auto_provision_meetings = False
        start = StartMeetingUseCase(coordinator=coordinator)
        get = GetMeetingUseCase(coordinator=coordinator)
        owner = new_user()
        request = await repo.save(make_request(owner_id=owner))
        await coordinator.submit_response(
            request.id, new_user(), ResponseDecision.ACCEPTED
        )
        ids = TransitionRequest(request_id=str(request.id), caller_id=str(owner))

        before = await get.execute(ids)
        started = await start.execute(ids)
        after = await get.execute(ids)

        assert before.meeting is None
        assert started.status == RequestStatus.ACTIVE
        assert after.meeting == started.meeting

    @pytest.mark.asyncio
    async def test_get_meeting_of_unknown_request(self, unit_env):
        use_case = await unit_env.get(GetMeetingUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                TransitionRequest(
                    request_id=str(make_request().id), caller_id=str(new_user())
                )
            )


class TestExpireStaleRequestsUseCase:
    """Tests for ExpireStaleRequestsUseCase."""

    @pytest.mark.asyncio
    async def test_nothing_stale(self, unit_env):
        repo = await unit_env.get(RequestRepository)
        use_case = await unit_env.get(ExpireStaleRequestsUseCase)
        await repo.save(make_request())

        result = await use_case.execute(ExpireStaleRequestsRequest(older_than_hours=1))

        assert result.expired == 0

