"""Response entity.

One record per responder attempt. Responses are append-only; the only
field written after creation is the meeting reference mirrored from the
request once provisioning succeeds.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from skillnet.domain.model.common import DomainModel
from skillnet.domain.value import (
    MeetingRef,
    RequestId,
    ResponseDecision,
    ResponseId,
    UserId,
)


class RequestResponse(DomainModel):
    """A responder's decision about one request."""

    id: ResponseId
    request_id: RequestId
    responder_id: UserId
    request_owner_id: UserId  # Denormalized for owner-side listings
    decision: ResponseDecision
    message: str = Field(default="", max_length=2000)
    meeting_ref: Optional[MeetingRef] = None
    created_at: datetime = Field(default_factory=datetime.now)
