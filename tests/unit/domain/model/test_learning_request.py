"""Unit tests for LearningRequest invariants."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from skillnet.domain.value import RequestKind, RequestStatus
from tests.conftest import make_meeting_ref, make_request, new_user


class TestLearningRequestValidation:
    """Tests for the model validator."""

    def test_one_to_one_has_single_slot(self):
        """One-to-one requests cannot take more than one participant."""
        with pytest.raises(ValidationError, match="exactly one participant slot"):
            make_request(kind=RequestKind.ONE_TO_ONE, max_participants=2)

    def test_one_to_one_cannot_be_voting(self):
        """Voting is a group-only status."""
        with pytest.raises(ValidationError, match="only available for group"):
            make_request(status=RequestStatus.VOTING_OPEN)

    def test_active_one_to_one_requires_acceptor(self):
        """Active one-to-one requests must record who accepted."""
        with pytest.raises(ValidationError, match="must have an acceptor"):
            make_request(status=RequestStatus.ACTIVE)

    def test_open_request_cannot_have_acceptor(self):
        """An open request has nobody accepted yet."""
        responder = new_user()
        with pytest.raises(ValidationError, match="cannot have an acceptor"):
            make_request(
                status=RequestStatus.OPEN,
                accepted_by=responder,
                accepted_at=datetime.now(),
            )

    def test_acceptor_and_time_set_together(self):
        """accepted_by without accepted_at is rejected."""
        with pytest.raises(ValidationError, match="set together"):
            make_request(
                kind=RequestKind.GROUP,
                status=RequestStatus.ACTIVE,
                accepted_by=new_user(),
            )

    def test_participants_within_capacity(self):
        """A group request cannot hold more participants than its capacity."""
        with pytest.raises(ValidationError, match="maximum is 2"):
            make_request(
                kind=RequestKind.GROUP,
                max_participants=2,
                participants=frozenset({new_user(), new_user(), new_user()}),
            )

    def test_owner_is_not_a_participant(self):
        """The owner never joins their own request."""
        owner = new_user()
        with pytest.raises(ValidationError, match="Owner cannot be a participant"):
            make_request(
                owner_id=owner,
                kind=RequestKind.GROUP,
                participants=frozenset({owner}),
            )

    def test_empty_title_rejected(self):
        """Title is required."""
        with pytest.raises(ValidationError):
            make_request(title="")


class TestLearningRequestMembership:
    """Tests for membership helpers."""

    def test_members_are_owner_acceptor_and_participants(self):
        """Owner, acceptor and participants are members; others are not."""
        owner = new_user()
        responder = new_user()
        request = make_request(
            owner_id=owner,
            status=RequestStatus.ACTIVE,
            accepted_by=responder,
            accepted_at=datetime.now(),
            participants=frozenset({responder}),
            meeting_ref=make_meeting_ref(),
        )

        assert request.is_owner(owner)
        assert not request.is_owner(responder)
        assert request.is_member(owner)
        assert request.is_member(responder)
        assert not request.is_member(new_user())

    def test_guard_snapshots_version_status_and_acceptor(self):
        """guard() captures what a conditional write must match."""
        request = make_request(version=4)

        guard = request.guard()

        assert guard.version == 4
        assert guard.status == RequestStatus.OPEN
        assert guard.accepted_by is None

    def test_free_slots(self):
        """free_slots counts remaining group capacity."""
        request = make_request(
            kind=RequestKind.GROUP,
            max_participants=3,
            participants=frozenset({new_user()}),
        )

        assert request.free_slots == 2
