"""Translation of domain errors into HTTP errors."""

from fastapi import HTTPException, status

from skillnet.domain.error import (
    DomainError,
    InvalidStateError,
    MeetingProvisioningFailedError,
    NotAuthorizedError,
    NotFoundError,
    RequestNotAvailableError,
    SelfResponseForbiddenError,
    StoreUnavailableError,
    ValidationError,
)


def http_error(error: DomainError) -> HTTPException:
    """Translate a domain error into the HTTP error returned to clients.

    Arbitration rejections are conflicts; a failed meeting provisioning is
    a 503 flagged retryable because the acceptance itself was recorded.
    """
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, NotAuthorizedError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(error))
    if isinstance(error, (SelfResponseForbiddenError, ValidationError)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, RequestNotAvailableError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": str(error),
                "reason": type(error).__name__,
                "retryable": False,
            },
        )
    if isinstance(error, InvalidStateError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    if isinstance(error, MeetingProvisioningFailedError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "message": str(error),
                "response_id": error.response_id,
                "retryable": error.recoverable,
            },
        )
    if isinstance(error, StoreUnavailableError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"message": "Storage temporarily unavailable", "retryable": True},
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
