"""Request lifecycle coordinator.

Owns every state change of a learning request. Status and acceptor
changes are written with a single compare-and-set against the request as
last read, which is what makes at most one acceptance win without a
global lock. Meeting provisioning happens between the optimistic and the
authoritative arbitration so a doomed acceptance never allocates a room.
"""

import asyncio
from datetime import datetime, timedelta
from typing import List, Optional
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from skillnet.domain.error import (
    AlreadyAcceptedError,
    CapacityExceededError,
    InvalidStateError,
    MeetingProvisioningFailedError,
    NotAuthorizedError,
    NotFoundError,
    NotOwnerError,
    RequestNotAvailableError,
    SelfResponseForbiddenError,
    StoreConflictError,
    StoreUnavailableError,
    ValidationError,
)
from skillnet.domain.model.request import LearningRequest
from skillnet.domain.model.response import RequestResponse
from skillnet.domain.repository import RequestRepository, ResponseRepository
from skillnet.domain.value import (
    MeetingRef,
    MeetingStatus,
    ProvisionedMeeting,
    RequestChanges,
    RequestId,
    RequestKind,
    RequestStatus,
    ResponseDecision,
    ResponseId,
    UserId,
)
from skillnet.domain.value.common import ValueObject

from .arbiter_service import ResponseArbiter
from .base import Service
from .lifecycle import ensure_transition
from .meeting_provisioner import MeetingProvisioner
from .visibility_service import VisibilityIndex


class SubmitOutcome(ValueObject):
    """Result of a successful submit_response call."""

    request: LearningRequest
    response: RequestResponse

    @property
    def meeting_ref(self) -> Optional[MeetingRef]:
        return self.request.meeting_ref


class RequestLifecycleCoordinator(Service):
    """Domain service orchestrating the request state machine."""

    def __init__(
        self,
        request_repository: RequestRepository,
        response_repository: ResponseRepository,
        arbiter: ResponseArbiter,
        visibility_index: VisibilityIndex,
        meeting_provisioner: MeetingProvisioner,
        provision_timeout_seconds: float = 15.0,
        end_timeout_seconds: float = 5.0,
        auto_provision_meetings: bool = True,
        default_group_max_participants: int = 5,
    ) -> None:
        """Initialize the coordinator.

        Args:
            request_repository: Request store
            response_repository: Response store
            arbiter: Acceptance decision logic
            visibility_index: Per-viewer hidden marks
            meeting_provisioner: External meeting service
            provision_timeout_seconds: A slower provision counts as failed
            end_timeout_seconds: Bound for best-effort meeting teardown
            auto_provision_meetings: Provision on acceptance, or wait for
                an explicit start_meeting
            default_group_max_participants: Capacity of group requests
                created without one
        """
        self.request_repository = request_repository
        self.response_repository = response_repository
        self.arbiter = arbiter
        self.visibility_index = visibility_index
        self.meeting_provisioner = meeting_provisioner
        self.provision_timeout_seconds = provision_timeout_seconds
        self.end_timeout_seconds = end_timeout_seconds
        self.auto_provision_meetings = auto_provision_meetings
        self.default_group_max_participants = default_group_max_participants

    # ------------------------------------------------------------------
    # Authoring
    # ------------------------------------------------------------------

    async def create_request(
        self,
        owner_id: UserId,
        kind: RequestKind,
        title: str,
        topic: str = "",
        description: str = "",
        subject: str = "",
        max_participants: Optional[int] = None,
        draft: bool = True,
    ) -> LearningRequest:
        """Create a request as a draft, or published straight away.

        One-to-one requests always have a single participant slot.

        Raises:
            ValidationError: Invalid fields, or missing topic/subject when
                publishing immediately
        """
        with logfire.span(
            "request_lifecycle.create_request",
            owner_id=str(owner_id),
            kind=kind.value,
            draft=draft,
        ):
            if kind == RequestKind.ONE_TO_ONE:
                capacity = 1
            else:
                capacity = max_participants or self.default_group_max_participants

            now = datetime.now()
            if not draft:
                self._ensure_publishable(topic, subject)

            try:
                request = LearningRequest(
                    id=RequestId(uuid4()),
                    owner_id=owner_id,
                    kind=kind,
                    title=title,
                    topic=topic,
                    description=description,
                    subject=subject,
                    status=RequestStatus.DRAFT if draft else RequestStatus.OPEN,
                    max_participants=capacity,
                    created_at=now,
                    updated_at=now,
                    published_at=None if draft else now,
                )
            except PydanticValidationError as e:
                raise ValidationError(str(e)) from e

            saved = await self.request_repository.save(request)
            logfire.info(
                "Request created",
                request_id=str(saved.id),
                status=saved.status.value,
            )
            return saved

    async def get_request(self, request_id: RequestId) -> LearningRequest:
        """Get a request by ID.

        Raises:
            NotFoundError: If the request does not exist
        """
        return await self._load(request_id)

    async def list_requests_by_owner(
        self, owner_id: UserId, limit: int = 50, offset: int = 0
    ) -> List[LearningRequest]:
        """Requests authored by owner_id, newest first."""
        return await self.request_repository.find_by_owner(owner_id, limit, offset)

    async def publish(self, request_id: RequestId, caller_id: UserId) -> LearningRequest:
        """Move a draft to open.

        Raises:
            NotFoundError: Unknown request
            InvalidStateError: Request is not a draft
            NotOwnerError: Caller is not the owner
            ValidationError: Topic or subject missing
        """
        with logfire.span(
            "request_lifecycle.publish",
            request_id=str(request_id),
            caller_id=str(caller_id),
        ):
            request = await self._load(request_id)
            self._ensure_not_terminal(request, "publish")
            if not request.is_owner(caller_id):
                raise NotOwnerError("publish", str(request_id), str(caller_id))
            if request.status != RequestStatus.DRAFT:
                raise InvalidStateError(str(request_id), request.status.value, "publish")
            self._ensure_publishable(request.topic, request.subject)

            updated = await self._transition(
                request,
                RequestStatus.OPEN,
                "publish",
                RequestChanges(status=RequestStatus.OPEN, published_at=datetime.now()),
            )
            logfire.info("Request published", request_id=str(request_id))
            return updated

    # ------------------------------------------------------------------
    # Responses
    # ------------------------------------------------------------------

    async def submit_response(
        self,
        request_id: RequestId,
        responder_id: UserId,
        decision: ResponseDecision,
        message: str = "",
    ) -> SubmitOutcome:
        """Record a responder's decision, arbitrating acceptances.

        Raises:
            NotFoundError: Unknown request
            SelfResponseForbiddenError: Responder owns the request
            InvalidStateError: Request is in a terminal status
            ValidationError: Decision is pending
            RequestNotAvailableError: Request no longer takes this response
                (AlreadyAcceptedError and CapacityExceededError included)
            MeetingProvisioningFailedError: Acceptance recorded, meeting
                could not be provisioned; the request is unchanged
        """
        with logfire.span(
            "request_lifecycle.submit_response",
            request_id=str(request_id),
            responder_id=str(responder_id),
            decision=decision.value,
        ):
            request = await self._load(request_id)

            if request.is_owner(responder_id):
                logfire.warn(
                    "Owner tried to respond to own request",
                    request_id=str(request_id),
                )
                raise SelfResponseForbiddenError(str(request_id))

            self._ensure_not_terminal(request, "respond to")

            if decision == ResponseDecision.PENDING:
                raise ValidationError("A response must accept, decline or pass")

            if decision == ResponseDecision.ACCEPTED:
                return await self._accept(request, responder_id, message)

            self.arbiter.ensure_respondable(request)

            if decision == ResponseDecision.NOT_INTERESTED:
                await self.visibility_index.hide(responder_id, request_id)

            response = await self._append_response(
                request, responder_id, decision, message
            )
            await self.request_repository.increment_response_count(request_id)
            logfire.info(
                "Response recorded",
                request_id=str(request_id),
                response_id=str(response.id),
                decision=decision.value,
            )
            return SubmitOutcome(
                request=await self._load(request_id), response=response
            )

    async def list_responses(
        self, request_id: RequestId, caller_id: UserId
    ) -> List[RequestResponse]:
        """Responses to a request, newest first. Owner only.

        Raises:
            NotFoundError: Unknown request
            NotOwnerError: Caller is not the owner
        """
        request = await self._load(request_id)
        if not request.is_owner(caller_id):
            raise NotOwnerError("list responses of", str(request_id), str(caller_id))
        responses = await self.response_repository.find_by_request(request_id)
        return sorted(responses, key=lambda r: r.created_at, reverse=True)

    async def record_view(self, request_id: RequestId, viewer_id: UserId) -> None:
        """Count a view. Owner views are ignored; storage errors are logged."""
        request = await self._load(request_id)
        if request.is_owner(viewer_id):
            return
        try:
            await self.request_repository.increment_view_count(request_id)
        except StoreUnavailableError as e:
            logfire.warn(
                "Failed to record request view",
                request_id=str(request_id),
                error=str(e),
            )

    # ------------------------------------------------------------------
    # Meetings
    # ------------------------------------------------------------------

    async def start_meeting(
        self, request_id: RequestId, caller_id: UserId
    ) -> LearningRequest:
        """Provision the meeting of an accepted request and make it active.

        Only needed when meetings are not provisioned on acceptance.

        Raises:
            NotFoundError: Unknown request
            NotAuthorizedError: Caller is not a member of the request
            InvalidStateError: Request is not accepted
            MeetingProvisioningFailedError: Request stays accepted
        """
        with logfire.span(
            "request_lifecycle.start_meeting",
            request_id=str(request_id),
            caller_id=str(caller_id),
        ):
            request = await self._load(request_id)
            if not request.is_member(caller_id):
                raise NotAuthorizedError("start meeting for", str(request_id), str(caller_id))
            if request.status != RequestStatus.ACCEPTED:
                raise InvalidStateError(
                    str(request_id), request.status.value, "start meeting for"
                )

            try:
                meeting = await self._provision(request, request.participants)
            except Exception as e:
                raise MeetingProvisioningFailedError(str(request_id), None, str(e)) from e

            meeting_ref = meeting.to_ref()
            try:
                updated = await self.request_repository.compare_and_set(
                    request.id,
                    request.guard(),
                    RequestChanges(status=RequestStatus.ACTIVE, meeting_ref=meeting_ref),
                )
            except (StoreConflictError, StoreUnavailableError):
                # Provisioning is idempotent per request, so a concurrent
                # start that already won is reported as success.
                current = await self._load(request_id)
                if current.status == RequestStatus.ACTIVE and current.meeting_ref:
                    return current
                raise RequestNotAvailableError(
                    str(request_id), "request changed while starting the meeting"
                )

            await self._mirror_meeting_ref(updated, meeting_ref)
            logfire.info(
                "Meeting started",
                request_id=str(request_id),
                meeting_id=meeting_ref.meeting_id,
            )
            return updated

    async def get_meeting(
        self, request_id: RequestId, caller_id: UserId
    ) -> Optional[MeetingRef]:
        """Meeting reference of a request, for its members only.

        Raises:
            NotFoundError: Unknown request
            NotAuthorizedError: Caller is not the owner, acceptor or a participant
        """
        request = await self._load(request_id)
        if not request.is_member(caller_id):
            raise NotAuthorizedError("view meeting of", str(request_id), str(caller_id))
        return request.meeting_ref

    # ------------------------------------------------------------------
    # Terminal transitions
    # ------------------------------------------------------------------

    async def complete(self, request_id: RequestId, caller_id: UserId) -> LearningRequest:
        """Mark an accepted or active request completed and end its meeting.

        Raises:
            NotFoundError: Unknown request
            InvalidStateError: Request is not accepted or active
            NotAuthorizedError: Caller is not a member of the request
        """
        with logfire.span(
            "request_lifecycle.complete",
            request_id=str(request_id),
            caller_id=str(caller_id),
        ):
            request = await self._load(request_id)
            self._ensure_not_terminal(request, "complete")
            if not request.is_member(caller_id):
                raise NotAuthorizedError("complete", str(request_id), str(caller_id))

            updated = await self._transition(
                request,
                RequestStatus.COMPLETED,
                "complete",
                RequestChanges(
                    status=RequestStatus.COMPLETED, completed_at=datetime.now()
                ),
            )
            logfire.info("Request completed", request_id=str(request_id))
            return await self._end_meeting(updated)

    async def archive(self, request_id: RequestId, caller_id: UserId) -> LearningRequest:
        """Archive a request that is not already cancelled, archived or expired.

        Raises:
            NotFoundError: Unknown request
            NotAuthorizedError: Caller is not a member of the request
            InvalidStateError: Request cannot be archived from its status
        """
        with logfire.span(
            "request_lifecycle.archive",
            request_id=str(request_id),
            caller_id=str(caller_id),
        ):
            request = await self._load(request_id)
            if not request.is_member(caller_id):
                raise NotAuthorizedError("archive", str(request_id), str(caller_id))

            updated = await self._transition(
                request,
                RequestStatus.ARCHIVED,
                "archive",
                RequestChanges(
                    status=RequestStatus.ARCHIVED, archived_at=datetime.now()
                ),
            )
            logfire.info("Request archived", request_id=str(request_id))
            return await self._end_meeting(updated)

    async def cancel(self, request_id: RequestId, caller_id: UserId) -> LearningRequest:
        """Cancel a request before anyone has been accepted. Owner only.

        Raises:
            NotFoundError: Unknown request
            InvalidStateError: Request is no longer open
            NotOwnerError: Caller is not the owner
        """
        with logfire.span(
            "request_lifecycle.cancel",
            request_id=str(request_id),
            caller_id=str(caller_id),
        ):
            request = await self._load(request_id)
            self._ensure_not_terminal(request, "cancel")
            if not request.is_owner(caller_id):
                raise NotOwnerError("cancel", str(request_id), str(caller_id))

            updated = await self._transition(
                request,
                RequestStatus.CANCELLED,
                "cancel",
                RequestChanges(
                    status=RequestStatus.CANCELLED, cancelled_at=datetime.now()
                ),
            )
            logfire.info("Request cancelled", request_id=str(request_id))
            return updated

    async def expire(self, request_id: RequestId) -> LearningRequest:
        """System transition of an unaccepted request to expired.

        Raises:
            NotFoundError: Unknown request
            InvalidStateError: Request is no longer open
        """
        with logfire.span("request_lifecycle.expire", request_id=str(request_id)):
            request = await self._load(request_id)
            updated = await self._transition(
                request,
                RequestStatus.EXPIRED,
                "expire",
                RequestChanges(status=RequestStatus.EXPIRED, expired_at=datetime.now()),
            )
            logfire.info("Request expired", request_id=str(request_id))
            return updated

    async def expire_stale(self, older_than: timedelta, batch_size: int = 100) -> int:
        """Expire every open request created more than older_than ago.

        Requests that change concurrently are skipped.

        Returns:
            Number of requests expired
        """
        with logfire.span(
            "request_lifecycle.expire_stale",
            older_than_seconds=older_than.total_seconds(),
        ):
            cutoff = datetime.now() - older_than
            candidates = await self.request_repository.find_expirable(cutoff, batch_size)
            expired = 0
            for request in candidates:
                try:
                    await self.expire(request.id)
                except (InvalidStateError, RequestNotAvailableError, NotFoundError) as e:
                    logfire.info(
                        "Skipped expiring request",
                        request_id=str(request.id),
                        reason=str(e),
                    )
                    continue
                expired += 1
            logfire.info("Stale requests expired", count=expired)
            return expired

    async def retract(self, request_id: RequestId, caller_id: UserId) -> None:
        """Delete a request with its responses and hidden marks. Owner only.

        The meeting is ended first, best-effort; a failed teardown does not
        block deletion.

        Raises:
            NotFoundError: Unknown request
            NotOwnerError: Caller is not the owner
        """
        with logfire.span(
            "request_lifecycle.retract",
            request_id=str(request_id),
            caller_id=str(caller_id),
        ):
            request = await self._load(request_id)
            if not request.is_owner(caller_id):
                raise NotOwnerError("delete", str(request_id), str(caller_id))

            if request.meeting_ref is not None:
                await self._end_meeting(request)

            responses = await self.response_repository.delete_by_request(request_id)
            marks = await self.visibility_index.purge_request(request_id)
            await self.request_repository.delete(request_id)
            logfire.info(
                "Request retracted",
                request_id=str(request_id),
                responses_deleted=responses,
                hidden_marks_deleted=marks,
            )

    # ------------------------------------------------------------------
    # Acceptance
    # ------------------------------------------------------------------

    async def _accept(
        self, request: LearningRequest, responder_id: UserId, message: str
    ) -> SubmitOutcome:
        # Optimistic check: do not provision for a doomed acceptance
        self.arbiter.ensure_can_accept(request, responder_id)

        fills = request.kind == RequestKind.ONE_TO_ONE or request.free_slots == 1
        if not fills:
            return await self._join_group(request, responder_id, message)
        if not self.auto_provision_meetings:
            return await self._accept_without_meeting(request, responder_id, message)

        try:
            meeting = await self._provision(
                request, request.participants | {responder_id}
            )
        except Exception as e:
            # Keep the responder's intent; the request stays as it was
            response = await self._append_response(
                request, responder_id, ResponseDecision.ACCEPTED, message
            )
            await self.request_repository.increment_response_count(request.id)
            logfire.error(
                "Meeting provisioning failed",
                request_id=str(request.id),
                response_id=str(response.id),
                error=str(e) or type(e).__name__,
            )
            raise MeetingProvisioningFailedError(
                str(request.id), str(response.id), str(e) or type(e).__name__
            ) from e

        # Authoritative check against the latest stored state
        current = await self._load(request.id)
        self.arbiter.ensure_can_accept(current, responder_id)
        ensure_transition(current, RequestStatus.ACTIVE, "accept")

        meeting_ref = meeting.to_ref()
        changes = self._acceptance_changes(
            current, responder_id, RequestStatus.ACTIVE, meeting_ref
        )
        response = self._new_response(
            current, responder_id, ResponseDecision.ACCEPTED, message, meeting_ref
        )
        updated = await self._accept_write(current, changes, response)
        logfire.info(
            "Request accepted",
            request_id=str(request.id),
            responder_id=str(responder_id),
            meeting_id=meeting_ref.meeting_id,
        )
        return SubmitOutcome(request=updated, response=response)

    async def _accept_without_meeting(
        self, request: LearningRequest, responder_id: UserId, message: str
    ) -> SubmitOutcome:
        ensure_transition(request, RequestStatus.ACCEPTED, "accept")
        changes = self._acceptance_changes(
            request, responder_id, RequestStatus.ACCEPTED, None
        )
        response = self._new_response(
            request, responder_id, ResponseDecision.ACCEPTED, message
        )
        updated = await self._accept_write(request, changes, response)
        logfire.info(
            "Request accepted, meeting pending",
            request_id=str(request.id),
            responder_id=str(responder_id),
        )
        return SubmitOutcome(request=updated, response=response)

    async def _join_group(
        self, request: LearningRequest, responder_id: UserId, message: str
    ) -> SubmitOutcome:
        status = None
        if request.status == RequestStatus.OPEN:
            ensure_transition(request, RequestStatus.VOTING_OPEN, "join")
            status = RequestStatus.VOTING_OPEN

        changes = RequestChanges(
            status=status,
            participants=request.participants | {responder_id},
            response_count_delta=1,
        )
        response = self._new_response(
            request, responder_id, ResponseDecision.ACCEPTED, message
        )
        updated = await self._accept_write(request, changes, response)
        logfire.info(
            "Participant joined group request",
            request_id=str(request.id),
            responder_id=str(responder_id),
            participants=len(updated.participants),
            max_participants=updated.max_participants,
        )
        return SubmitOutcome(request=updated, response=response)

    def _acceptance_changes(
        self,
        request: LearningRequest,
        responder_id: UserId,
        status: RequestStatus,
        meeting_ref: Optional[MeetingRef],
    ) -> RequestChanges:
        participants = request.participants | {responder_id}
        if request.kind == RequestKind.GROUP:
            # The participant set plays the role of the single acceptor
            return RequestChanges(
                status=status,
                participants=participants,
                meeting_ref=meeting_ref,
                response_count_delta=1,
            )
        return RequestChanges(
            status=status,
            accepted_by=responder_id,
            accepted_at=datetime.now(),
            participants=participants,
            meeting_ref=meeting_ref,
            response_count_delta=1,
        )

    async def _accept_write(
        self,
        request: LearningRequest,
        changes: RequestChanges,
        response: RequestResponse,
    ) -> LearningRequest:
        # The request update and its accepted response land together or not at all
        try:
            return await self.request_repository.compare_and_set_with_response(
                request.id, request.guard(), changes, response
            )
        except (StoreConflictError, StoreUnavailableError) as e:
            # The losing write is not retried. Any meeting provisioned for
            # it is the same room the winner holds, so it is left running.
            logfire.warn(
                "Acceptance lost conditional write",
                request_id=str(request.id),
                error=type(e).__name__,
            )
            raise await self._rejection_after_conflict(request.id) from e

    async def _rejection_after_conflict(
        self, request_id: RequestId
    ) -> RequestNotAvailableError:
        try:
            current = await self.request_repository.find_by_id(request_id)
        except StoreUnavailableError:
            return RequestNotAvailableError(str(request_id))
        if current is None:
            return RequestNotAvailableError(str(request_id), "request was deleted")
        if current.accepted_by is not None:
            return AlreadyAcceptedError(str(request_id))
        if current.kind == RequestKind.GROUP and current.free_slots <= 0:
            return CapacityExceededError(str(request_id), current.max_participants)
        return RequestNotAvailableError(
            str(request_id), "request changed concurrently"
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _load(self, request_id: RequestId) -> LearningRequest:
        request = await self.request_repository.find_by_id(request_id)
        if request is None:
            logfire.warn("Request not found", request_id=str(request_id))
            raise NotFoundError("Request", str(request_id))
        return request

    def _ensure_not_terminal(self, request: LearningRequest, action: str) -> None:
        if request.status.is_terminal:
            raise InvalidStateError(str(request.id), request.status.value, action)

    def _ensure_publishable(self, topic: str, subject: str) -> None:
        missing = [
            name
            for name, value in (("topic", topic), ("subject", subject))
            if not value.strip()
        ]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    async def _transition(
        self,
        request: LearningRequest,
        target: RequestStatus,
        action: str,
        changes: RequestChanges,
    ) -> LearningRequest:
        ensure_transition(request, target, action)
        try:
            return await self.request_repository.compare_and_set(
                request.id, request.guard(), changes
            )
        except (StoreConflictError, StoreUnavailableError) as e:
            logfire.warn(
                "Transition lost conditional write",
                request_id=str(request.id),
                action=action,
                error=type(e).__name__,
            )
            raise await self._rejection_after_conflict(request.id) from e

    def _new_response(
        self,
        request: LearningRequest,
        responder_id: UserId,
        decision: ResponseDecision,
        message: str,
        meeting_ref: Optional[MeetingRef] = None,
    ) -> RequestResponse:
        try:
            return RequestResponse(
                id=ResponseId(uuid4()),
                request_id=request.id,
                responder_id=responder_id,
                request_owner_id=request.owner_id,
                decision=decision,
                message=message,
                meeting_ref=meeting_ref,
                created_at=datetime.now(),
            )
        except PydanticValidationError as e:
            raise ValidationError(str(e)) from e

    async def _append_response(
        self,
        request: LearningRequest,
        responder_id: UserId,
        decision: ResponseDecision,
        message: str,
    ) -> RequestResponse:
        response = self._new_response(request, responder_id, decision, message)
        return await self.response_repository.append(response)

    async def _provision(
        self, request: LearningRequest, participants: frozenset[UserId]
    ) -> ProvisionedMeeting:
        with logfire.span(
            "request_lifecycle.provision_meeting",
            request_id=str(request.id),
            participants=len(participants),
        ):
            return await asyncio.wait_for(
                self.meeting_provisioner.provision(
                    request.id, request.owner_id, sorted(participants, key=str)
                ),
                timeout=self.provision_timeout_seconds,
            )

    async def _mirror_meeting_ref(
        self, request: LearningRequest, meeting_ref: MeetingRef
    ) -> None:
        responses = await self.response_repository.find_by_request(request.id)
        for response in responses:
            if (
                response.decision == ResponseDecision.ACCEPTED
                and response.meeting_ref is None
                and request.is_member(response.responder_id)
            ):
                await self.response_repository.set_meeting_ref(response.id, meeting_ref)

    async def _end_meeting(self, request: LearningRequest) -> LearningRequest:
        """End the request's meeting if it has a live one. Never raises."""
        ref = request.meeting_ref
        if ref is None or ref.meeting_status == MeetingStatus.ENDED:
            return request

        try:
            await asyncio.wait_for(
                self.meeting_provisioner.end(ref.meeting_id),
                timeout=self.end_timeout_seconds,
            )
        except Exception as e:
            logfire.warn(
                "Failed to end meeting",
                request_id=str(request.id),
                meeting_id=ref.meeting_id,
                error=str(e) or type(e).__name__,
            )
            return request

        try:
            await self.request_repository.update_meeting_status(
                request.id, MeetingStatus.ENDED
            )
        except (StoreUnavailableError, NotFoundError) as e:
            logfire.warn(
                "Failed to record ended meeting",
                request_id=str(request.id),
                error=str(e),
            )
            return request

        ended = ref.model_copy(update={"meeting_status": MeetingStatus.ENDED})
        return request.model_copy(update={"meeting_ref": ended})
