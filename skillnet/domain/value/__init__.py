"""Domain value objects for SkillNet."""

from skillnet.domain.value.identifiers import (
    MeetingId,
    RequestId,
    ResponseId,
    UserId,
)
from skillnet.domain.value.types import (
    MeetingRef,
    MeetingStatus,
    ProvisionedMeeting,
    RequestChanges,
    RequestGuard,
    RequestKind,
    RequestStatus,
    ResponseDecision,
    RoomName,
)

__all__ = [
    # Identifiers
    "UserId",
    "RequestId",
    "ResponseId",
    "MeetingId",
    # Types
    "RequestKind",
    "RequestStatus",
    "ResponseDecision",
    "MeetingStatus",
    "MeetingRef",
    "ProvisionedMeeting",
    "RequestGuard",
    "RequestChanges",
    "RoomName",
]
