"""Test configuration and fixtures."""

import os

# Settings are read from the environment; give tests working secrets and
# provider credentials before anything constructs Settings.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH__MANAGED_JWT_SECRET", "test-managed-secret-0123456789abcdef")
os.environ.setdefault("AUTH__SESSION_JWT_SECRET", "test-session-secret-0123456789abcdef")
os.environ.setdefault("AUTH__GOOGLE__CLIENT_ID", "test-google-client")
os.environ.setdefault("AUTH__GOOGLE__CLIENT_SECRET", "test-google-secret")
os.environ.setdefault("AUTH__LINKEDIN__CLIENT_ID", "test-linkedin-client")
os.environ.setdefault("AUTH__LINKEDIN__CLIENT_SECRET", "test-linkedin-secret")

import logfire  # noqa: E402
import pytest  # noqa: E402

from dip.config import AuthSettings  # noqa: E402
from dip.domain.value import AuthProvider, ExternalIdentity, ManagedSessionUser  # noqa: E402

logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def auth_settings() -> AuthSettings:
    """Auth settings with fixed test secrets."""
    return AuthSettings(
        managed_jwt_secret="test-managed-secret-0123456789abcdef",
        session_jwt_secret="test-session-secret-0123456789abcdef",
    )


@pytest.fixture
def google_identity() -> ExternalIdentity:
    return ExternalIdentity(
        provider=AuthProvider.GOOGLE,
        subject_id="1234567890",
        email="Ayse.Yilmaz@Example.com ",
        first_name="Ayşe",
        last_name="Yılmaz",
        avatar_url="https://lh3.googleusercontent.com/a/photo.jpg",
    )


@pytest.fixture
def linkedin_identity() -> ExternalIdentity:
    return ExternalIdentity(
        provider=AuthProvider.LINKEDIN,
        subject_id="AbC-123",
        email="ayse.yilmaz@example.com",
        first_name="Ayse",
        last_name="Yilmaz",
    )


@pytest.fixture
def managed_user() -> ManagedSessionUser:
    return ManagedSessionUser(
        id="0b6f0d9e-6f5c-4bf4-9a57-3d1c2e5f7a10",
        email="ayse.yilmaz@example.com",
        user_metadata={"full_name": "Ayşe Yılmaz", "avatar_url": "https://example.com/a.png"},
        app_metadata={"provider": "email"},
    )
