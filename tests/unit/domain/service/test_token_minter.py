"""Unit tests for TokenMinter."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from dip.config import AuthSettings
from dip.domain.error import SigningError
from dip.domain.service import TokenMinter
from dip.domain.service.token_minter import MANAGED_AUDIENCE
from dip.domain.value import AuthProvider, ExternalIdentity

FIXED_NOW = datetime(2025, 3, 1, 12, 30, 15, 987654, tzinfo=timezone.utc)


def _decode(token: str, secret: str) -> dict:
    return jwt.decode(
        token,
        secret,
        algorithms=["HS256"],
        audience=MANAGED_AUDIENCE,
        options={"verify_exp": False},
    )


class TestMint:
    """Tests for TokenMinter.mint()."""

    def test_subject_is_namespaced_by_provider(self, auth_settings, google_identity):
        """Subject should be oauth_<provider>_<subject_id>."""
        minter = TokenMinter(auth_settings, clock=lambda: FIXED_NOW)

        token = minter.mint(google_identity)

        assert token.subject == "oauth_google_1234567890"
        claims = _decode(token.token, auth_settings.managed_jwt_secret)
        assert claims["sub"] == "oauth_google_1234567890"

    def test_expires_exactly_24_hours_after_issue(self, auth_settings, google_identity):
        """exp - iat should be exactly 86400 seconds."""
        minter = TokenMinter(auth_settings, clock=lambda: FIXED_NOW)

        token = minter.mint(google_identity)
        claims = _decode(token.token, auth_settings.managed_jwt_secret)

        assert claims["exp"] - claims["iat"] == 86400
        assert token.expires_at - token.issued_at == timedelta(hours=24)
        assert token.issued_at == FIXED_NOW.replace(microsecond=0)

    def test_claims_carry_role_audience_and_metadata(self, auth_settings, google_identity):
        """Token should be shaped like a managed-auth session token."""
        minter = TokenMinter(auth_settings, clock=lambda: FIXED_NOW)

        claims = _decode(minter.mint(google_identity).token, auth_settings.managed_jwt_secret)

        assert claims["aud"] == "authenticated"
        assert claims["role"] == "authenticated"
        assert claims["phone"] == ""
        assert claims["email"] == google_identity.email
        assert claims["app_metadata"] == {"provider": "google", "providers": ["google"]}
        assert claims["user_metadata"]["full_name"] == "Ayşe Yılmaz"
        assert claims["user_metadata"]["provider_id"] == "1234567890"

    def test_is_deterministic_for_fixed_clock(self, auth_settings, linkedin_identity):
        """Same identity and clock should mint the same token."""
        minter = TokenMinter(auth_settings, clock=lambda: FIXED_NOW)

        assert minter.mint(linkedin_identity).token == minter.mint(linkedin_identity).token

    def test_same_person_on_two_providers_gets_two_subjects(
        self, auth_settings, google_identity, linkedin_identity
    ):
        """Subjects differ per provider; reconciliation happens by email later."""
        minter = TokenMinter(auth_settings)

        assert minter.mint(google_identity).subject != minter.mint(linkedin_identity).subject

    def test_full_name_without_last_name_has_no_trailing_space(self, auth_settings):
        """full_name should be trimmed when a name part is empty."""
        identity = ExternalIdentity(
            provider=AuthProvider.LINKEDIN,
            subject_id="x1",
            email="solo@example.com",
            first_name="Cher",
        )
        minter = TokenMinter(auth_settings)

        token = minter.mint(identity)

        assert token.metadata["user_metadata"]["full_name"] == "Cher"

    def test_raises_signing_error_without_secret(self, google_identity):
        """A missing shared secret is fatal."""
        minter = TokenMinter(AuthSettings(managed_jwt_secret=""))

        with pytest.raises(SigningError):
            minter.mint(google_identity)

    def test_token_is_not_in_repr(self, auth_settings, google_identity):
        """The signed token should never show up in logs via repr."""
        token = TokenMinter(auth_settings).mint(google_identity)

        assert token.token not in repr(token)
