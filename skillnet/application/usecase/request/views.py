"""Read models shared by the request use cases."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from skillnet.domain.model import LearningRequest, RequestResponse
from skillnet.domain.value import (
    MeetingRef,
    MeetingStatus,
    RequestKind,
    RequestStatus,
    ResponseDecision,
    UserId,
)


class MeetingView(BaseModel):
    """Meeting details, shown to request members only."""

    meeting_id: str
    join_url: str
    meeting_status: MeetingStatus

    @classmethod
    def from_domain(cls, meeting_ref: MeetingRef) -> "MeetingView":
        return cls(
            meeting_id=meeting_ref.meeting_id,
            join_url=meeting_ref.join_url,
            meeting_status=meeting_ref.meeting_status,
        )


class RequestView(BaseModel):
    """A learning request as returned to callers."""

    request_id: str
    owner_id: str
    kind: RequestKind
    title: str
    topic: str
    description: str
    subject: str
    status: RequestStatus
    max_participants: int
    participants: list[str]
    accepted_by: Optional[str] = None
    accepted_at: Optional[datetime] = None
    meeting: Optional[MeetingView] = None
    response_count: int
    view_count: int
    created_at: datetime
    updated_at: datetime
    published_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    archived_at: Optional[datetime] = None

    @classmethod
    def from_domain(
        cls, request: LearningRequest, viewer_id: Optional[UserId] = None
    ) -> "RequestView":
        """Build the view; the meeting is only included for members."""
        show_meeting = (
            request.meeting_ref is not None
            and viewer_id is not None
            and request.is_member(viewer_id)
        )
        return cls(
            request_id=str(request.id),
            owner_id=str(request.owner_id),
            kind=request.kind,
            title=request.title,
            topic=request.topic,
            description=request.description,
            subject=request.subject,
            status=request.status,
            max_participants=request.max_participants,
            participants=sorted(str(p) for p in request.participants),
            accepted_by=str(request.accepted_by) if request.accepted_by else None,
            accepted_at=request.accepted_at,
            meeting=MeetingView.from_domain(request.meeting_ref) if show_meeting else None,
            response_count=request.response_count,
            view_count=request.view_count,
            created_at=request.created_at,
            updated_at=request.updated_at,
            published_at=request.published_at,
            completed_at=request.completed_at,
            archived_at=request.archived_at,
        )


class ResponseView(BaseModel):
    """A response as returned to callers."""

    response_id: str
    request_id: str
    responder_id: str
    decision: ResponseDecision
    message: str
    meeting: Optional[MeetingView] = None
    created_at: datetime

    @classmethod
    def from_domain(cls, response: RequestResponse) -> "ResponseView":
        return cls(
            response_id=str(response.id),
            request_id=str(response.request_id),
            responder_id=str(response.responder_id),
            decision=response.decision,
            message=response.message,
            meeting=(
                MeetingView.from_domain(response.meeting_ref)
                if response.meeting_ref
                else None
            ),
            created_at=response.created_at,
        )
