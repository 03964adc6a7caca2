"""JWT token utilities."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from pydantic import BaseModel

from encore.config import AuthSettings
from encore.domain.value import OwnerId


class TokenPayload(BaseModel):
    """JWT token payload."""

    sub: str
    exp: datetime

    @property
    def owner_id(self) -> OwnerId:
        """Owner ID carried in the subject claim."""
        return OwnerId(UUID(self.sub))


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(owner_id: str, settings: AuthSettings) -> str:
    """Create a JWT token for an owner.

    Args:
        owner_id: Owner ID
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days)

    payload = {
        "sub": owner_id,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        token_payload = TokenPayload(**payload)
        UUID(token_payload.sub)
        return token_payload
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except (jwt.InvalidTokenError, ValueError):
        raise JWTError("Invalid token")
