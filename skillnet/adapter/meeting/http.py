"""HTTP client for a remote meeting service.

Expected service API:

    POST   /meetings              {"request_id", "owner_id", "participant_ids"}
                                  -> 200/201 {"meeting_id", "join_url"}
    DELETE /meetings/{meeting_id} -> 204 (404 means already gone)

The request id is sent as the ``Idempotency-Key`` header so a retried
provisioning returns the room created the first time.
"""

from typing import Sequence

import httpx
import logfire

from skillnet.adapter.error import MeetingProviderError
from skillnet.domain.service.meeting_provisioner import MeetingProvisioner
from skillnet.domain.value import MeetingId, ProvisionedMeeting, RequestId, UserId


class HttpMeetingProvisioner(MeetingProvisioner):
    """Meeting provisioner backed by a remote HTTP service."""

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Meeting service root URL
            api_key: Bearer token for the service, if it requires one
            timeout_seconds: Per-call HTTP timeout
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def provision(
        self,
        request_id: RequestId,
        owner_id: UserId,
        participant_ids: Sequence[UserId],
    ) -> ProvisionedMeeting:
        """Create (or fetch) the meeting for a request.

        Raises:
            MeetingProviderError: On transport errors, non-2xx responses or
                a malformed body
        """
        with logfire.span("meeting_service.provision", request_id=str(request_id)):
            headers = self._headers()
            headers["Idempotency-Key"] = str(request_id)
            payload = {
                "request_id": str(request_id),
                "owner_id": str(owner_id),
                "participant_ids": [str(p) for p in participant_ids],
            }

            try:
                async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                    response = await client.post(
                        f"{self.base_url}/meetings", json=payload, headers=headers
                    )
            except httpx.HTTPError as e:
                logfire.error(
                    "Meeting service unreachable",
                    request_id=str(request_id),
                    error=str(e),
                )
                raise MeetingProviderError(f"Meeting service unreachable: {e}") from e

            if response.status_code not in (200, 201):
                logfire.error(
                    "Meeting provisioning rejected",
                    request_id=str(request_id),
                    status_code=response.status_code,
                    body=response.text,
                )
                raise MeetingProviderError(
                    f"Meeting service returned {response.status_code}",
                    status_code=response.status_code,
                )

            try:
                data = response.json()
                meeting = ProvisionedMeeting(
                    meeting_id=MeetingId(str(data["meeting_id"])),
                    join_url=data["join_url"],
                )
            except (ValueError, KeyError, TypeError) as e:
                raise MeetingProviderError(f"Malformed meeting service response: {e}") from e

            logfire.info(
                "Meeting provisioned",
                request_id=str(request_id),
                meeting_id=meeting.meeting_id,
            )
            return meeting

    async def end(self, meeting_id: MeetingId) -> None:
        """End a meeting. A meeting that no longer exists counts as ended.

        Raises:
            MeetingProviderError: On transport errors or unexpected statuses
        """
        with logfire.span("meeting_service.end", meeting_id=meeting_id):
            try:
                async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                    response = await client.delete(
                        f"{self.base_url}/meetings/{meeting_id}",
                        headers=self._headers(),
                    )
            except httpx.HTTPError as e:
                raise MeetingProviderError(f"Meeting service unreachable: {e}") from e

            if response.status_code == 404:
                logfire.info("Meeting already gone", meeting_id=meeting_id)
                return
            if response.status_code not in (200, 202, 204):
                raise MeetingProviderError(
                    f"Meeting service returned {response.status_code}",
                    status_code=response.status_code,
                )
