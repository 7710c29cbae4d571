"""Test configuration and helpers."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from skillnet.domain.model import LearningRequest
from skillnet.domain.value import (
    MeetingId,
    MeetingRef,
    RequestId,
    RequestKind,
    RequestStatus,
    UserId,
)


def new_user() -> UserId:
    """A fresh user id."""
    return UserId(uuid4())


def make_request(
    owner_id: Optional[UserId] = None,
    kind: RequestKind = RequestKind.ONE_TO_ONE,
    status: RequestStatus = RequestStatus.OPEN,
    max_participants: Optional[int] = None,
    created_at: Optional[datetime] = None,
    **overrides,
) -> LearningRequest:
    """Build a valid learning request for tests.

    Args:
        owner_id: Owner; a fresh user when omitted
        kind: Request kind
        status: Initial status
        max_participants: Capacity; 1 for one-to-one, 3 for group when omitted
        created_at: Creation time, now when omitted
        **overrides: Any other LearningRequest field

    Returns:
        Request ready to be saved into a repository
    """
    if max_participants is None:
        max_participants = 1 if kind == RequestKind.ONE_TO_ONE else 3
    now = created_at or datetime.now()
    fields = dict(
        id=RequestId(uuid4()),
        owner_id=owner_id or new_user(),
        kind=kind,
        title="Help with linear algebra",
        topic="Eigenvalues",
        description="Stuck on diagonalisation",
        subject="mathematics",
        status=status,
        max_participants=max_participants,
        created_at=now,
        updated_at=now,
        published_at=None if status == RequestStatus.DRAFT else now,
    )
    fields.update(overrides)
    return LearningRequest(**fields)


def make_meeting_ref(name: str = "room-1") -> MeetingRef:
    """A scheduled meeting reference."""
    return MeetingRef(
        meeting_id=MeetingId(name), join_url=f"https://meet.example.test/{name}"
    )
