"""Meeting provisioner interface."""

from typing import Sequence

from skillnet.domain.value import MeetingId, ProvisionedMeeting, RequestId, UserId


class MeetingProvisioner:
    """Allocates and tears down meeting rooms for accepted requests.

    Implementations must be idempotent per request id: provisioning the
    same request twice returns the same room rather than creating a second
    one, because an acceptance may be retried after a partial failure.
    """

    async def provision(
        self,
        request_id: RequestId,
        owner_id: UserId,
        participant_ids: Sequence[UserId],
    ) -> ProvisionedMeeting:
        """Allocate a meeting room for a request.

        Args:
            request_id: Request the meeting belongs to (idempotency key)
            owner_id: Request owner
            participant_ids: Accepted responder, or every group participant

        Returns:
            The meeting id and join URL

        Raises:
            Exception: Any failure; callers treat every error as recoverable
        """
        raise NotImplementedError

    async def end(self, meeting_id: MeetingId) -> None:
        """End a meeting. Best-effort; callers log and ignore failures.

        Args:
            meeting_id: Meeting to end
        """
        raise NotImplementedError
