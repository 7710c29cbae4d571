"""Jitsi meeting provisioner.

Public Jitsi deployments create a room the first time someone joins its
URL, so provisioning only has to pick a room name. The name depends only
on the request id and a server-side secret: provisioning is idempotent,
and knowing a request id is not enough to find its room.
"""

import hashlib
import hmac
import re
from typing import Sequence

import logfire

from skillnet.domain.service.meeting_provisioner import MeetingProvisioner
from skillnet.domain.value import (
    MeetingId,
    ProvisionedMeeting,
    RequestId,
    RoomName,
    UserId,
)


def room_name_for(request_id: RequestId, prefix: str, secret: str) -> RoomName:
    """Room name for a request, keyed by secret.

    Format: ``{prefix}-{24 hex chars of HMAC-SHA256(secret, request id)}``,
    e.g. ``SkillNet-4e0d7c9b2a1f9f3c2a1b6d5e``.
    """
    digest = hmac.new(
        secret.encode(), str(request_id).encode(), hashlib.sha256
    ).hexdigest()[:24]
    clean_prefix = re.sub(r"[^A-Za-z0-9-]", "", prefix) or "SkillNet"
    return RoomName(f"{clean_prefix}-{digest}")


class JitsiMeetingProvisioner(MeetingProvisioner):
    """Meeting provisioner for a Jitsi Meet domain."""

    def __init__(
        self,
        room_secret: str,
        domain: str = "meet.jit.si",
        room_prefix: str = "SkillNet",
    ) -> None:
        """Initialize the provisioner.

        Args:
            room_secret: Key for room names; changing it moves every room
            domain: Jitsi Meet host
            room_prefix: Prefix for generated room names
        """
        self.room_secret = room_secret
        self.domain = domain
        self.room_prefix = room_prefix

    async def provision(
        self,
        request_id: RequestId,
        owner_id: UserId,
        participant_ids: Sequence[UserId],
    ) -> ProvisionedMeeting:
        """Return the room for a request."""
        room = room_name_for(request_id, self.room_prefix, self.room_secret)
        join_url = f"https://{self.domain}/{room}"
        logfire.info(
            "Jitsi room assigned",
            request_id=str(request_id),
            participants=len(participant_ids) + 1,
        )
        return ProvisionedMeeting(meeting_id=MeetingId(str(room)), join_url=join_url)

    async def end(self, meeting_id: MeetingId) -> None:
        """Nothing to tear down; public rooms close when the last person leaves."""
        logfire.info("Jitsi room released")
