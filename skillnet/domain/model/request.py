"""Learning request aggregate root.

A request is posted by its owner and answered by other users. It is a
multi-writer entity: the owner authors it, but lifecycle transitions
(accept, complete, archive) are written on behalf of any participant, so
every status change goes through a versioned compare-and-set.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from skillnet.domain.model.common import DomainModel
from skillnet.domain.value import (
    MeetingRef,
    RequestGuard,
    RequestId,
    RequestKind,
    RequestStatus,
    UserId,
)

# One-to-one requests must carry an acceptor in these statuses and must not
# carry one in the pre-acceptance ones. Archived keeps whatever it had.
_ACCEPTED_STATUSES = frozenset(
    {RequestStatus.ACCEPTED, RequestStatus.ACTIVE, RequestStatus.COMPLETED}
)
_UNACCEPTED_STATUSES = frozenset(
    {
        RequestStatus.DRAFT,
        RequestStatus.OPEN,
        RequestStatus.CANCELLED,
        RequestStatus.EXPIRED,
    }
)


class LearningRequest(DomainModel):
    """Learning request aggregate root.

    Business rules:
    - owner_id and kind never change after creation
    - accepted_by is write-once and set together with accepted_at
    - participants excludes the owner and never exceeds max_participants
    - one-to-one requests have exactly one participant slot
    - response_count and view_count only grow
    - version increases by one on every conditional write
    """

    id: RequestId
    owner_id: UserId
    kind: RequestKind
    title: str = Field(min_length=1, max_length=300)
    topic: str = Field(default="", max_length=300)
    description: str = Field(default="", max_length=10000)
    subject: str = Field(default="", max_length=100)
    status: RequestStatus = RequestStatus.DRAFT
    max_participants: int = Field(default=1, ge=1)
    participants: frozenset[UserId] = frozenset()
    accepted_by: Optional[UserId] = None
    accepted_at: Optional[datetime] = None
    meeting_ref: Optional[MeetingRef] = None
    response_count: int = Field(default=0, ge=0)
    view_count: int = Field(default=0, ge=0)
    version: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    published_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    archived_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    expired_at: Optional[datetime] = None

    @model_validator(mode="after")
    def validate_lifecycle_fields(self) -> "LearningRequest":
        """Validate capacity and acceptance invariants."""
        if len(self.participants) > self.max_participants:
            raise ValueError(
                f"Request has {len(self.participants)} participants, "
                f"maximum is {self.max_participants}"
            )
        if self.owner_id in self.participants:
            raise ValueError("Owner cannot be a participant of their own request")
        if (self.accepted_by is None) != (self.accepted_at is None):
            raise ValueError("accepted_by and accepted_at must be set together")

        if self.kind == RequestKind.ONE_TO_ONE:
            if self.max_participants != 1:
                raise ValueError("One-to-one requests have exactly one participant slot")
            if self.status == RequestStatus.VOTING_OPEN:
                raise ValueError("Voting is only available for group requests")
            if self.status in _ACCEPTED_STATUSES and self.accepted_by is None:
                raise ValueError(f"A {self.status.value} request must have an acceptor")
            if self.status in _UNACCEPTED_STATUSES and self.accepted_by is not None:
                raise ValueError(f"A {self.status.value} request cannot have an acceptor")
        return self

    def is_owner(self, user_id: UserId) -> bool:
        """Whether user_id authored this request."""
        return self.owner_id == user_id

    def is_member(self, user_id: UserId) -> bool:
        """Whether user_id is the owner, the acceptor or a participant."""
        return (
            self.owner_id == user_id
            or self.accepted_by == user_id
            or user_id in self.participants
        )

    def guard(self) -> RequestGuard:
        """Expectation matching this snapshot, for a conditional write."""
        return RequestGuard(
            version=self.version, status=self.status, accepted_by=self.accepted_by
        )

    @property
    def free_slots(self) -> int:
        return self.max_participants - len(self.participants)
