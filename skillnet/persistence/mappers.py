"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
rather than through SQLAlchemy's ORM mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from skillnet.domain.model import HiddenMark, LearningRequest, RequestResponse
from skillnet.domain.value import (
    MeetingId,
    MeetingRef,
    MeetingStatus,
    RequestChanges,
    RequestId,
    RequestKind,
    RequestStatus,
    ResponseDecision,
    ResponseId,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _row_to_meeting_ref(row: Dict[str, Any]) -> Optional[MeetingRef]:
    if not row.get("meeting_id"):
        return None
    return MeetingRef(
        meeting_id=MeetingId(row["meeting_id"]),
        join_url=row["meeting_join_url"],
        meeting_status=MeetingStatus(row.get("meeting_status") or "scheduled"),
    )


def _meeting_ref_to_columns(meeting_ref: Optional[MeetingRef]) -> Dict[str, Any]:
    if meeting_ref is None:
        return {"meeting_id": None, "meeting_join_url": None, "meeting_status": None}
    return {
        "meeting_id": meeting_ref.meeting_id,
        "meeting_join_url": meeting_ref.join_url,
        "meeting_status": meeting_ref.meeting_status.value,
    }


def row_to_request(row: Dict[str, Any]) -> LearningRequest:
    """Convert database row to LearningRequest domain model.

    Args:
        row: Database row as dict

    Returns:
        LearningRequest domain model
    """
    accepted_by = row.get("accepted_by")
    return LearningRequest(
        id=RequestId(_uuid(row["id"])),
        owner_id=UserId(_uuid(row["owner_id"])),
        kind=RequestKind(row["kind"]),
        title=row["title"],
        topic=row.get("topic") or "",
        description=row.get("description") or "",
        subject=row.get("subject") or "",
        status=RequestStatus(row["status"]),
        max_participants=row["max_participants"],
        participants=frozenset(UserId(_uuid(p)) for p in row.get("participants") or []),
        accepted_by=UserId(_uuid(accepted_by)) if accepted_by else None,
        accepted_at=row.get("accepted_at"),
        meeting_ref=_row_to_meeting_ref(row),
        response_count=row["response_count"],
        view_count=row["view_count"],
        version=row["version"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        published_at=row.get("published_at"),
        completed_at=row.get("completed_at"),
        archived_at=row.get("archived_at"),
        cancelled_at=row.get("cancelled_at"),
        expired_at=row.get("expired_at"),
    )


def request_to_dict(request: LearningRequest) -> Dict[str, Any]:
    """Convert LearningRequest domain model to database dict.

    Args:
        request: LearningRequest domain model

    Returns:
        Dict suitable for database insertion
    """
    data = request.model_dump(exclude={"meeting_ref", "participants"})
    data["kind"] = request.kind.value
    data["status"] = request.status.value
    data["participants"] = sorted(request.participants, key=str)
    data.update(_meeting_ref_to_columns(request.meeting_ref))
    return data


def changes_to_values(changes: RequestChanges) -> Dict[str, Any]:
    """Column values written by a compare-and-set.

    Unset fields are left out; the counter delta is applied by the
    repository as an SQL expression.
    """
    data = changes.model_dump(
        exclude_none=True,
        exclude={"response_count_delta", "meeting_ref", "participants"},
    )
    if changes.status is not None:
        data["status"] = changes.status.value
    if changes.participants is not None:
        data["participants"] = sorted(changes.participants, key=str)
    if changes.meeting_ref is not None:
        data.update(_meeting_ref_to_columns(changes.meeting_ref))
    return data


def row_to_response(row: Dict[str, Any]) -> RequestResponse:
    """Convert database row to RequestResponse domain model."""
    return RequestResponse(
        id=ResponseId(_uuid(row["id"])),
        request_id=RequestId(_uuid(row["request_id"])),
        responder_id=UserId(_uuid(row["responder_id"])),
        request_owner_id=UserId(_uuid(row["request_owner_id"])),
        decision=ResponseDecision(row["decision"]),
        message=row.get("message") or "",
        meeting_ref=_row_to_meeting_ref(row),
        created_at=row["created_at"],
    )


def response_to_dict(response: RequestResponse) -> Dict[str, Any]:
    """Convert RequestResponse domain model to database dict."""
    data = response.model_dump(exclude={"meeting_ref"})
    data["decision"] = response.decision.value
    data.update(_meeting_ref_to_columns(response.meeting_ref))
    return data


def row_to_hidden_mark(row: Dict[str, Any]) -> HiddenMark:
    """Convert database row to HiddenMark domain model."""
    return HiddenMark(
        viewer_id=UserId(_uuid(row["viewer_id"])),
        request_id=RequestId(_uuid(row["request_id"])),
        hidden_at=row["hidden_at"],
    )


def hidden_mark_to_dict(hidden_mark: HiddenMark) -> Dict[str, Any]:
    """Convert HiddenMark domain model to database dict."""
    return hidden_mark.model_dump()
