"""Unit tests for the request transition table."""

from datetime import datetime

import pytest

from skillnet.domain.error import InvalidStateError
from skillnet.domain.service import (
    TRANSITIONS,
    can_transition,
    ensure_transition,
    is_respondable,
)
from skillnet.domain.value import RequestKind, RequestStatus
from tests.conftest import make_meeting_ref, make_request, new_user


class TestTransitionTable:
    """Tests for allowed status moves."""

    def test_every_status_has_an_entry(self):
        """The table covers every status."""
        assert set(TRANSITIONS) == set(RequestStatus)

    @pytest.mark.parametrize(
        "status",
        [RequestStatus.CANCELLED, RequestStatus.ARCHIVED, RequestStatus.EXPIRED],
    )
    def test_closed_statuses_have_no_exits(self, status):
        """Cancelled, archived and expired requests never change again."""
        assert TRANSITIONS[status] == frozenset()

    def test_completed_may_only_be_archived(self):
        """Completed requests can only move to archived."""
        assert TRANSITIONS[RequestStatus.COMPLETED] == frozenset(
            {RequestStatus.ARCHIVED}
        )

    def test_voting_only_for_groups(self):
        """Only group requests can enter voting."""
        assert can_transition(
            RequestKind.GROUP, RequestStatus.OPEN, RequestStatus.VOTING_OPEN
        )
        assert not can_transition(
            RequestKind.ONE_TO_ONE, RequestStatus.OPEN, RequestStatus.VOTING_OPEN
        )

    def test_active_cannot_be_cancelled(self):
        """Once accepted, a request is completed or archived, not cancelled."""
        assert not can_transition(
            RequestKind.ONE_TO_ONE, RequestStatus.ACTIVE, RequestStatus.CANCELLED
        )

    def test_draft_cannot_be_accepted(self):
        """Drafts must be published first."""
        assert not can_transition(
            RequestKind.ONE_TO_ONE, RequestStatus.DRAFT, RequestStatus.ACTIVE
        )


class TestEnsureTransition:
    """Tests for ensure_transition."""

    def test_raises_invalid_state(self):
        """A disallowed move raises InvalidStateError naming the action."""
        responder = new_user()
        request = make_request(
            status=RequestStatus.COMPLETED,
            accepted_by=responder,
            accepted_at=datetime.now(),
            participants=frozenset({responder}),
            meeting_ref=make_meeting_ref(),
        )

        with pytest.raises(InvalidStateError, match="Cannot cancel"):
            ensure_transition(request, RequestStatus.CANCELLED, "cancel")

    def test_allowed_move_passes(self):
        """An allowed move returns silently."""
        ensure_transition(make_request(), RequestStatus.EXPIRED, "expire")


class TestIsRespondable:
    """Tests for is_respondable."""

    def test_open_one_to_one_is_respondable(self):
        assert is_respondable(make_request())

    def test_voting_group_is_respondable(self):
        request = make_request(
            kind=RequestKind.GROUP,
            status=RequestStatus.VOTING_OPEN,
            participants=frozenset({new_user()}),
        )
        assert is_respondable(request)

    def test_draft_is_not_respondable(self):
        assert not is_respondable(make_request(status=RequestStatus.DRAFT))
