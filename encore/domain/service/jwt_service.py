"""JWT token domain service."""

import logfire

from encore.config import AuthSettings
from encore.domain.error import AuthError
from encore.domain.value import OwnerId
from encore.util.jwt import JWTError, TokenPayload, verify_token

from .base import Service


class JWTService(Service):
    """Domain service resolving the owner of a request from its session token."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                return verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def require_owner(self, token: str | None) -> OwnerId:
        """Resolve the owner of a request.

        Args:
            token: JWT token string (optional)

        Returns:
            Owner ID from the token

        Raises:
            AuthError: If the token is missing, invalid or expired
        """
        if not token:
            raise AuthError()

        try:
            payload = self.verify_token(token)
        except JWTError as e:
            raise AuthError(str(e)) from e
        return payload.owner_id
