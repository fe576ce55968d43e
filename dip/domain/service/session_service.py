"""Modern session token domain service."""

import logfire

from dip.config import AuthSettings
from dip.util.jwt import JWTError, SessionTokenPayload, create_session_token, verify_session_token

from .base import Service


class SessionService(Service):
    """Domain service for the modern session cookie token."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize session service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, email: str) -> str:
        """Create a session token for a local user.

        Args:
            user_id: Local user ID
            email: Normalized email

        Returns:
            JWT token string
        """
        with logfire.span("session_service.create_token", user_id=user_id):
            token = create_session_token(user_id, email, self.auth_settings)
            logfire.info("Session token created", user_id=user_id)
            return token

    def verify_token(self, token: str) -> SessionTokenPayload:
        """Verify a session token and extract its payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("session_service.verify_token"):
            try:
                payload = verify_session_token(token, self.auth_settings)
                logfire.info("Session token verified", user_id=payload.user_id)
                return payload
            except JWTError as e:
                logfire.warn("Session token verification failed", error=str(e))
                raise

    def is_valid(self, token: str | None) -> bool:
        """Check a session token without raising.

        Args:
            token: Session token (optional)

        Returns:
            True only for a present, correctly signed, unexpired token
        """
        if not token:
            return False

        try:
            self.verify_token(token)
            return True
        except JWTError:
            return False
