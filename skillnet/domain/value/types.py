"""Domain value objects for SkillNet.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from skillnet.domain.value.common import RootValueObject, ValueObject
from skillnet.domain.value.identifiers import MeetingId, UserId


class RequestKind(str, Enum):
    """Kind of learning request."""

    ONE_TO_ONE = "one-to-one"
    GROUP = "group"


class RequestStatus(str, Enum):
    """Lifecycle state of a learning request.

    one-to-one: draft -> open -> active -> completed
    group:      draft -> open -> voting_open -> (accepted) -> active -> completed
    Side branches: cancelled / expired before acceptance, archived afterwards.
    """

    DRAFT = "draft"
    OPEN = "open"
    VOTING_OPEN = "voting_open"  # Group only: collecting participants
    ACCEPTED = "accepted"  # Accepted, meeting not provisioned yet
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ARCHIVED = "archived"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        """Whether no lifecycle operation may leave this status."""
        return self in (
            RequestStatus.COMPLETED,
            RequestStatus.CANCELLED,
            RequestStatus.ARCHIVED,
            RequestStatus.EXPIRED,
        )


class ResponseDecision(str, Enum):
    """A responder's decision about a request."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    NOT_INTERESTED = "not_interested"


class MeetingStatus(str, Enum):
    """Status of a provisioned meeting as mirrored on the request."""

    SCHEDULED = "scheduled"
    ENDED = "ended"


class RoomName(RootValueObject[str]):
    """Meeting room name.

    Alphanumerics and hyphens only, 1-128 characters.
    Example: 'SkillNet-1to1-3f2a9c1e-5b7d'
    """

    @field_validator("root")
    @classmethod
    def validate_room_name(cls, v: str) -> str:
        """Validate room name format."""
        if not re.match(r"^[A-Za-z0-9-]{1,128}$", v):
            raise ValueError(
                "Room name must be 1-128 characters, alphanumeric with hyphens"
            )
        return v


class MeetingRef(ValueObject):
    """Reference to a provisioned meeting.

    Set on a request only after provisioning succeeded, and mirrored onto
    the accepting response.
    """

    meeting_id: MeetingId
    join_url: str = Field(min_length=1)
    meeting_status: MeetingStatus = MeetingStatus.SCHEDULED


class ProvisionedMeeting(ValueObject):
    """What a meeting provisioner returns for a request."""

    meeting_id: MeetingId
    join_url: str

    def to_ref(self) -> MeetingRef:
        """Build the reference stored on the request."""
        return MeetingRef(meeting_id=self.meeting_id, join_url=self.join_url)


class RequestGuard(ValueObject):
    """Expected state for a compare-and-set write on a request.

    The write applies only if the stored request still has exactly this
    version, status and acceptor.
    """

    version: int = Field(ge=0)
    status: RequestStatus
    accepted_by: Optional[UserId] = None


class RequestChanges(ValueObject):
    """Field updates applied by a compare-and-set write.

    Only fields that are set (not None) are written. ``response_count_delta``
    is added to the stored counter.
    """

    status: Optional[RequestStatus] = None
    accepted_by: Optional[UserId] = None
    accepted_at: Optional[datetime] = None
    meeting_ref: Optional[MeetingRef] = None
    participants: Optional[frozenset[UserId]] = None
    response_count_delta: int = Field(default=0, ge=0)
    published_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    archived_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    expired_at: Optional[datetime] = None
