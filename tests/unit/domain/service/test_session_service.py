"""Unit tests for SessionService."""

from datetime import datetime, timedelta, timezone

import pytest

from dip.config import AuthSettings
from dip.domain.service import SessionService
from dip.util.jwt import JWTError, create_session_token


class TestSessionService:
    """Tests for modern session token handling."""

    def test_created_token_verifies(self, auth_settings):
        """A freshly created token should verify to the same user."""
        service = SessionService(auth_settings)

        token = service.create_token("user-1", "a@example.com")
        payload = service.verify_token(token)

        assert payload.user_id == "user-1"
        assert payload.email == "a@example.com"

    def test_expired_token_is_rejected(self, auth_settings):
        """Expired tokens should raise JWTError."""
        service = SessionService(auth_settings)
        long_ago = datetime.now(timezone.utc) - timedelta(days=30)
        token = create_session_token("user-1", "a@example.com", auth_settings, now=long_ago)

        with pytest.raises(JWTError, match="expired"):
            service.verify_token(token)

    def test_token_signed_with_other_secret_is_rejected(self, auth_settings):
        """Tokens from another secret should not verify."""
        other = SessionService(
            AuthSettings(session_jwt_secret="another-session-secret-0123456789")
        )
        token = other.create_token("user-1", "a@example.com")

        with pytest.raises(JWTError):
            SessionService(auth_settings).verify_token(token)

    @pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
    def test_is_valid_false_for_missing_or_garbage(self, auth_settings, token):
        """is_valid should never raise."""
        assert SessionService(auth_settings).is_valid(token) is False

    def test_is_valid_true_for_good_token(self, auth_settings):
        service = SessionService(auth_settings)

        assert service.is_valid(service.create_token("user-1", "a@example.com"))
