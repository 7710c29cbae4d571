"""Mock meeting provisioner for tests and local development."""

import asyncio
from typing import Sequence

from skillnet.adapter.error import MeetingProviderError
from skillnet.domain.service.meeting_provisioner import MeetingProvisioner
from skillnet.domain.value import MeetingId, ProvisionedMeeting, RequestId, UserId


class MockMeetingProvisioner(MeetingProvisioner):
    """In-process provisioner that records calls.

    One room per request id, like the real providers. ``fail_provision``
    and ``fail_end`` make the next calls raise; ``delay_seconds`` stalls
    provisioning, which lets tests interleave concurrent acceptances or
    trip the coordinator's timeout.
    """

    def __init__(self) -> None:
        self.rooms: dict[RequestId, ProvisionedMeeting] = {}
        self.provision_calls: list[tuple[RequestId, UserId, tuple[UserId, ...]]] = []
        self.ended: list[MeetingId] = []
        self.fail_provision = False
        self.fail_end = False
        self.delay_seconds = 0.0

    async def provision(
        self,
        request_id: RequestId,
        owner_id: UserId,
        participant_ids: Sequence[UserId],
    ) -> ProvisionedMeeting:
        self.provision_calls.append((request_id, owner_id, tuple(participant_ids)))
        # Yield so concurrent acceptances interleave here
        await asyncio.sleep(self.delay_seconds)
        if self.fail_provision:
            raise MeetingProviderError("mock meeting service unavailable")

        if request_id not in self.rooms:
            room = f"mock-{str(request_id)[:8]}"
            self.rooms[request_id] = ProvisionedMeeting(
                meeting_id=MeetingId(room),
                join_url=f"https://meet.example.test/{room}",
            )
        return self.rooms[request_id]

    async def end(self, meeting_id: MeetingId) -> None:
        if self.fail_end:
            raise MeetingProviderError("mock meeting service unavailable")
        self.ended.append(meeting_id)
