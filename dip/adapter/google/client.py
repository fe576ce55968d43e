"""Google OAuth 2.0 client implementation."""

import logfire

from dip.adapter.error import IdentityFetchError, MissingEmailError
from dip.adapter.oauth2 import OAuth2ProviderClient
from dip.domain.service.auth_service import OAuthClient
from dip.domain.value import AuthProvider, ExternalIdentity, ProviderTokenSet


class GoogleOAuthClient(OAuthClient):
    """Base class for Google OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealGoogleOAuthClient(OAuth2ProviderClient, GoogleOAuthClient):
    """Google OAuth 2.0 client using the v2 userinfo endpoint."""

    provider = AuthProvider.GOOGLE
    authorize_url = "https://accounts.google.com/o/oauth2/v2/auth"
    token_url = "https://oauth2.googleapis.com/token"
    user_info_url = "https://www.googleapis.com/oauth2/v2/userinfo"
    scope = "openid email profile"
    extra_authorize_params = {"access_type": "offline", "prompt": "consent"}

    async def fetch_identity(self, access_token: str) -> ExternalIdentity:
        """Fetch the Google account's identity.

        Raises:
            IdentityFetchError: If userinfo cannot be fetched or has no id
            MissingEmailError: If the account exposes no email
        """
        with logfire.span("google.fetch_identity"):
            data = await self._get_json(self.user_info_url, access_token, "Google user info")
            if not data.get("id"):
                raise IdentityFetchError(self.provider.value, "Google user info has no id")

            email = data.get("email")
            if not email:
                logfire.warn("Google identity has no email", user_id=data.get("id"))
                raise MissingEmailError(self.provider.value)

            return ExternalIdentity(
                provider=AuthProvider.GOOGLE,
                subject_id=str(data["id"]),
                email=email,
                first_name=data.get("given_name") or "",
                last_name=data.get("family_name") or "",
                avatar_url=data.get("picture"),
            )


class MockGoogleOAuthClient(GoogleOAuthClient):
    """Mock Google OAuth client for testing.

    Returns deterministic test data without making real API calls.
    """

    def build_authorization_url(self, state: str | None = None) -> str:
        url = "https://accounts.google.com/o/oauth2/v2/auth?mock=true"
        return f"{url}&state={state}" if state else url

    async def exchange_code(self, code: str) -> ProviderTokenSet:
        return ProviderTokenSet(access_token=f"mock-google-token-{code}")

    async def fetch_identity(self, access_token: str) -> ExternalIdentity:
        return ExternalIdentity(
            provider=AuthProvider.GOOGLE,
            subject_id="google-mock-123",
            email="mock.user@example.com",
            first_name="Mock",
            last_name="User",
            avatar_url="https://example.com/google-avatar.jpg",
        )
