"""JWT token utilities."""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from pydantic import BaseModel

from dip.config import AuthSettings


class SessionTokenPayload(BaseModel):
    """Modern session token payload."""

    user_id: str
    email: str
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def encode_token(payload: dict[str, Any], secret: str, algorithm: str) -> str:
    """Encode and sign a JWT.

    Args:
        payload: Claims to sign
        secret: Shared HMAC secret
        algorithm: Signing algorithm (e.g. HS256)

    Returns:
        Encoded JWT token
    """
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_token(
    token: str,
    secret: str,
    algorithm: str,
    audience: str | None = None,
) -> dict[str, Any]:
    """Verify and decode a JWT.

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        return jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            audience=audience,
            options={"verify_aud": audience is not None},
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")


def create_session_token(
    user_id: str,
    email: str,
    settings: AuthSettings,
    now: datetime | None = None,
) -> str:
    """Create the modern session token for a local user.

    Args:
        user_id: Local user ID
        email: Normalized email
        settings: Authentication settings
        now: Issue time (defaults to current UTC time)

    Returns:
        Encoded JWT token
    """
    issued_at = now or datetime.now(timezone.utc)
    expiry = issued_at + timedelta(days=settings.session_expiry_days)

    payload = {
        "user_id": user_id,
        "email": email,
        "iat": issued_at,
        "exp": expiry,
    }

    return encode_token(payload, settings.session_jwt_secret, settings.jwt_algorithm)


def verify_session_token(token: str, settings: AuthSettings) -> SessionTokenPayload:
    """Verify and decode a modern session token.

    Raises:
        JWTError: If token is invalid or expired
    """
    payload = decode_token(token, settings.session_jwt_secret, settings.jwt_algorithm)
    try:
        return SessionTokenPayload(**payload)
    except ValueError:
        raise JWTError("Invalid token payload")
