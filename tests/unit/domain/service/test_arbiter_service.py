"""Unit tests for ResponseArbiter."""

from datetime import datetime

import pytest

from skillnet.domain.error import (
    AlreadyAcceptedError,
    CapacityExceededError,
    RequestNotAvailableError,
)
from skillnet.domain.service import ResponseArbiter, Verdict
from skillnet.domain.value import RequestKind, RequestStatus
from tests.conftest import make_meeting_ref, make_request, new_user


@pytest.fixture
def arbiter():
    return ResponseArbiter()


def accepted_request(responder):
    return make_request(
        status=RequestStatus.ACTIVE,
        accepted_by=responder,
        accepted_at=datetime.now(),
        participants=frozenset({responder}),
        meeting_ref=make_meeting_ref(),
    )


class TestArbitrate:
    """Tests for arbitrate."""

    def test_open_request_proceeds(self, arbiter):
        """A fresh open request may be accepted."""
        result = arbiter.arbitrate(make_request(), new_user())

        assert result.proceed
        assert result.verdict == Verdict.PROCEED
        assert result.reason is None

    def test_accepted_request_reports_already_accepted(self, arbiter):
        """An acceptor on record beats every other check."""
        result = arbiter.arbitrate(accepted_request(new_user()), new_user())

        assert not result.proceed
        assert result.verdict == Verdict.ALREADY_ACCEPTED

    def test_full_group_reports_capacity(self, arbiter):
        """A group with no free slot is full even while still active."""
        members = frozenset({new_user(), new_user()})
        request = make_request(
            kind=RequestKind.GROUP,
            status=RequestStatus.ACTIVE,
            max_participants=2,
            participants=members,
            meeting_ref=make_meeting_ref(),
        )

        result = arbiter.arbitrate(request, new_user())

        assert result.verdict == Verdict.CAPACITY_EXCEEDED

    def test_closed_request_not_available(self, arbiter):
        """Cancelled requests take no acceptances."""
        result = arbiter.arbitrate(
            make_request(status=RequestStatus.CANCELLED), new_user()
        )

        assert result.verdict == Verdict.NOT_AVAILABLE
        assert "cancelled" in result.reason

    def test_joined_responder_not_available(self, arbiter):
        """A participant cannot join the same group twice."""
        responder = new_user()
        request = make_request(
            kind=RequestKind.GROUP,
            status=RequestStatus.VOTING_OPEN,
            participants=frozenset({responder}),
        )

        result = arbiter.arbitrate(request, responder)

        assert result.verdict == Verdict.NOT_AVAILABLE
        assert "already joined" in result.reason


class TestEnsureCanAccept:
    """Tests for ensure_can_accept."""

    def test_raises_already_accepted(self, arbiter):
        with pytest.raises(AlreadyAcceptedError):
            arbiter.ensure_can_accept(accepted_request(new_user()), new_user())

    def test_raises_capacity_exceeded(self, arbiter):
        request = make_request(
            kind=RequestKind.GROUP,
            status=RequestStatus.ACTIVE,
            max_participants=1,
            participants=frozenset({new_user()}),
            meeting_ref=make_meeting_ref(),
        )

        with pytest.raises(CapacityExceededError) as exc_info:
            arbiter.ensure_can_accept(request, new_user())

        assert exc_info.value.max_participants == 1

    def test_rejections_share_a_base(self, arbiter):
        """Callers can catch every rejection as RequestNotAvailableError."""
        with pytest.raises(RequestNotAvailableError):
            arbiter.ensure_can_accept(accepted_request(new_user()), new_user())


class TestEnsureRespondable:
    """Tests for ensure_respondable."""

    def test_draft_rejected(self, arbiter):
        with pytest.raises(RequestNotAvailableError, match="draft"):
            arbiter.ensure_respondable(make_request(status=RequestStatus.DRAFT))

    def test_open_accepted(self, arbiter):
        arbiter.ensure_respondable(make_request())
