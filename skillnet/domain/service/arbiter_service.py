"""Response arbitration.

Decides whether a candidate acceptance may proceed against a request as
last read. The coordinator runs it once before provisioning a meeting and
again immediately before the conditional write; the second run is the
authoritative one.
"""

from enum import Enum
from typing import Optional

from skillnet.domain.error import (
    AlreadyAcceptedError,
    CapacityExceededError,
    RequestNotAvailableError,
)
from skillnet.domain.model.request import LearningRequest
from skillnet.domain.value import RequestKind, UserId
from skillnet.domain.value.common import ValueObject

from .base import Service
from .lifecycle import is_respondable


class Verdict(str, Enum):
    """Outcome of arbitrating one acceptance."""

    PROCEED = "proceed"
    NOT_AVAILABLE = "not_available"
    ALREADY_ACCEPTED = "already_accepted"
    CAPACITY_EXCEEDED = "capacity_exceeded"


class Arbitration(ValueObject):
    """Verdict plus a human readable reason for rejections."""

    verdict: Verdict
    reason: Optional[str] = None

    @property
    def proceed(self) -> bool:
        return self.verdict == Verdict.PROCEED


class ResponseArbiter(Service):
    """Pure decision logic for acceptances; performs no I/O."""

    def arbitrate(self, request: LearningRequest, responder_id: UserId) -> Arbitration:
        """Decide whether responder_id may accept request.

        Checks run in this order so that the loser of an acceptance race
        is told the request was already accepted rather than merely
        unavailable:

        1. an acceptor is already recorded -> ALREADY_ACCEPTED
        2. group request has no free slot -> CAPACITY_EXCEEDED
        3. status no longer takes responses, or responder already joined
           -> NOT_AVAILABLE

        Args:
            request: Request as last read from the store
            responder_id: Identity attempting to accept

        Returns:
            The arbitration verdict
        """
        if request.accepted_by is not None:
            return Arbitration(
                verdict=Verdict.ALREADY_ACCEPTED,
                reason="request has already been accepted",
            )

        if request.kind == RequestKind.GROUP and request.free_slots <= 0:
            return Arbitration(
                verdict=Verdict.CAPACITY_EXCEEDED,
                reason=f"request is full ({request.max_participants} participants)",
            )

        if not is_respondable(request):
            return Arbitration(
                verdict=Verdict.NOT_AVAILABLE,
                reason=f"request is {request.status.value}",
            )

        if responder_id in request.participants:
            return Arbitration(
                verdict=Verdict.NOT_AVAILABLE,
                reason="responder has already joined this request",
            )

        return Arbitration(verdict=Verdict.PROCEED)

    def ensure_can_accept(self, request: LearningRequest, responder_id: UserId) -> None:
        """Arbitrate and raise the matching rejection error.

        Raises:
            AlreadyAcceptedError: Another acceptance won
            CapacityExceededError: Group request is full
            RequestNotAvailableError: Request no longer takes acceptances
        """
        result = self.arbitrate(request, responder_id)
        if result.proceed:
            return

        request_id = str(request.id)
        if result.verdict == Verdict.ALREADY_ACCEPTED:
            raise AlreadyAcceptedError(request_id)
        if result.verdict == Verdict.CAPACITY_EXCEEDED:
            raise CapacityExceededError(request_id, request.max_participants)
        raise RequestNotAvailableError(request_id, result.reason or "not available")

    def ensure_respondable(self, request: LearningRequest) -> None:
        """Raise RequestNotAvailableError unless the request takes responses.

        Used for declines and not-interested responses, which need an open
        request but no free slot.
        """
        if not is_respondable(request):
            raise RequestNotAvailableError(
                str(request.id), f"request is {request.status.value}"
            )
