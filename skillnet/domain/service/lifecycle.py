"""Request lifecycle transition table.

Every status change a coordinator performs is validated here, so allowed
moves live in one place instead of scattered status comparisons.
"""

from skillnet.domain.error import InvalidStateError
from skillnet.domain.model.request import LearningRequest
from skillnet.domain.value import RequestKind, RequestStatus

S = RequestStatus

TRANSITIONS: dict[RequestStatus, frozenset[RequestStatus]] = {
    S.DRAFT: frozenset({S.OPEN, S.ARCHIVED}),
    S.OPEN: frozenset(
        {S.VOTING_OPEN, S.ACCEPTED, S.ACTIVE, S.CANCELLED, S.EXPIRED, S.ARCHIVED}
    ),
    S.VOTING_OPEN: frozenset(
        {S.ACCEPTED, S.ACTIVE, S.CANCELLED, S.EXPIRED, S.ARCHIVED}
    ),
    S.ACCEPTED: frozenset({S.ACTIVE, S.COMPLETED, S.ARCHIVED}),
    S.ACTIVE: frozenset({S.COMPLETED, S.ARCHIVED}),
    S.COMPLETED: frozenset({S.ARCHIVED}),
    S.CANCELLED: frozenset(),
    S.ARCHIVED: frozenset(),
    S.EXPIRED: frozenset(),
}

# Statuses in which a request still takes responses
RESPONDABLE: dict[RequestKind, frozenset[RequestStatus]] = {
    RequestKind.ONE_TO_ONE: frozenset({S.OPEN}),
    RequestKind.GROUP: frozenset({S.OPEN, S.VOTING_OPEN}),
}


def can_transition(
    kind: RequestKind, current: RequestStatus, target: RequestStatus
) -> bool:
    """Whether a request of the given kind may move from current to target."""
    if target == S.VOTING_OPEN and kind != RequestKind.GROUP:
        return False
    return target in TRANSITIONS[current]


def ensure_transition(
    request: LearningRequest, target: RequestStatus, action: str
) -> None:
    """Raise InvalidStateError unless request may move to target.

    Args:
        request: Request as last read
        target: Desired status
        action: Operation name used in the error message

    Raises:
        InvalidStateError: If the move is not in the transition table
    """
    if not can_transition(request.kind, request.status, target):
        raise InvalidStateError(str(request.id), request.status.value, action)


def is_respondable(request: LearningRequest) -> bool:
    """Whether the request's status still takes responses."""
    return request.status in RESPONDABLE[request.kind]
