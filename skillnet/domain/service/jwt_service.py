"""Caller identity service."""

import logfire

from skillnet.config import AuthSettings
from skillnet.util.jwt import JWTError, TokenPayload, verify_token

from .base import Service


class JWTService(Service):
    """Resolves the authenticated caller from an identity token.

    Authentication itself happens upstream; this service only checks the
    token signature and expiry and reads the user id.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def verify_token(self, token: str) -> TokenPayload:
        """Verify a token and extract its payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("Identity token rejected", error=str(e))
                raise
            return payload

    def get_user_id_from_token(self, token: str | None) -> str | None:
        """User ID from a token, or None if it is missing or invalid."""
        if not token:
            return None

        try:
            return self.verify_token(token).user_id
        except JWTError:
            return None
