"""Caller identity for API routes."""

from fastapi import HTTPException, status

from skillnet.domain.service import JWTService


def token_from(auth_token: str | None, authorization: str | None) -> str | None:
    """Pick the identity token from the cookie or a bearer header."""
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip()
    return auth_token


def optional_caller(
    jwt_service: JWTService, auth_token: str | None, authorization: str | None
) -> str | None:
    """User ID of the caller, or None for anonymous or invalid tokens."""
    return jwt_service.get_user_id_from_token(token_from(auth_token, authorization))


def require_caller(
    jwt_service: JWTService, auth_token: str | None, authorization: str | None
) -> str:
    """User ID of the caller.

    Raises:
        HTTPException: 401 if no valid identity token was sent
    """
    user_id = optional_caller(jwt_service, auth_token, authorization)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return user_id
