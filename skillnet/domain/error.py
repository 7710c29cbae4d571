"""Domain layer errors.

Every lifecycle outcome other than success is one of these. Callers
(use cases, routes) translate them; nothing below the coordinator leaks
raw storage errors upward.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class NotAuthorizedError(DomainError):
    """Raised when a caller may not perform a transition on a request."""

    def __init__(self, action: str, request_id: str, user_id: str):
        self.action = action
        self.request_id = request_id
        self.user_id = user_id
        super().__init__(f"User {user_id} is not authorized to {action} request {request_id}")


class NotOwnerError(NotAuthorizedError):
    """Raised when an owner-only transition is attempted by someone else."""

    pass


class InvalidStateError(DomainError):
    """Raised when a transition is not allowed from the current status."""

    def __init__(self, request_id: str, status: str, action: str):
        self.request_id = request_id
        self.status = status
        self.action = action
        super().__init__(f"Cannot {action} request {request_id} in status '{status}'")


class SelfResponseForbiddenError(DomainError):
    """Raised when an owner responds to their own request."""

    def __init__(self, request_id: str):
        self.request_id = request_id
        super().__init__(f"Cannot respond to your own request {request_id}")


class RequestNotAvailableError(DomainError):
    """Arbitration rejection: the request can no longer take this response."""

    def __init__(self, request_id: str, reason: str = "request is no longer available"):
        self.request_id = request_id
        self.reason = reason
        super().__init__(f"Request {request_id}: {reason}")


class AlreadyAcceptedError(RequestNotAvailableError):
    """Arbitration rejection: another responder's acceptance won."""

    def __init__(self, request_id: str):
        super().__init__(request_id, "request has already been accepted")


class CapacityExceededError(RequestNotAvailableError):
    """Arbitration rejection: a group request has no free participant slot."""

    def __init__(self, request_id: str, max_participants: int):
        self.max_participants = max_participants
        super().__init__(
            request_id, f"request is full ({max_participants} participants)"
        )


class MeetingProvisioningFailedError(DomainError):
    """Acceptance was recorded but the meeting could not be provisioned.

    Recoverable: the response is durable, the request stays available and
    the acceptance may be retried.
    """

    recoverable = True

    def __init__(self, request_id: str, response_id: str | None, cause: str):
        self.request_id = request_id
        self.response_id = response_id
        self.cause = cause
        super().__init__(
            f"Meeting provisioning failed for request {request_id}: {cause}"
        )


class StoreConflictError(DomainError):
    """A conditional write lost against a concurrent writer."""

    def __init__(self, request_id: str):
        self.request_id = request_id
        super().__init__(f"Conditional write conflict on request {request_id}")


class StoreUnavailableError(DomainError):
    """Storage stayed unavailable after bounded retries."""

    pass
