"""LinkedIn OAuth 2.0 client implementation.

LinkedIn splits identity across a profile endpoint and an email endpoint.
Both calls must succeed for an identity to be produced.
"""

import logfire

from dip.adapter.error import IdentityFetchError, MissingEmailError
from dip.adapter.oauth2 import OAuth2ProviderClient
from dip.domain.service.auth_service import OAuthClient
from dip.domain.value import AuthProvider, ExternalIdentity, ProviderTokenSet

# Localized name fields are keyed by locale; English first, then Turkish
NAME_LOCALES = ("en_US", "tr_TR")


class LinkedInOAuthClient(OAuthClient):
    """Base class for LinkedIn OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealLinkedInOAuthClient(OAuth2ProviderClient, LinkedInOAuthClient):
    """LinkedIn OAuth 2.0 client."""

    provider = AuthProvider.LINKEDIN
    authorize_url = "https://www.linkedin.com/oauth/v2/authorization"
    token_url = "https://www.linkedin.com/oauth/v2/accessToken"
    profile_url = (
        "https://api.linkedin.com/v2/people/~"
        ":(id,firstName,lastName,profilePicture(displayImage~:playableStreams))"
    )
    email_url = (
        "https://api.linkedin.com/v2/emailAddress"
        "?q=members&projection=(elements*(handle~))"
    )
    scope = "r_liteprofile r_emailaddress"

    async def fetch_identity(self, access_token: str) -> ExternalIdentity:
        """Fetch the LinkedIn member's identity.

        Raises:
            IdentityFetchError: If either call fails or the profile has no id
            MissingEmailError: If the email payload holds no address
        """
        with logfire.span("linkedin.fetch_identity"):
            profile = await self._get_json(self.profile_url, access_token, "LinkedIn profile")
            if not profile.get("id"):
                raise IdentityFetchError(self.provider.value, "LinkedIn profile has no id")
            email_data = await self._get_json(self.email_url, access_token, "LinkedIn email")

            email = self._extract_email(email_data)
            if not email:
                logfire.warn("LinkedIn identity has no email", member_id=profile.get("id"))
                raise MissingEmailError(self.provider.value)

            return ExternalIdentity(
                provider=AuthProvider.LINKEDIN,
                subject_id=str(profile["id"]),
                email=email,
                first_name=self._localized(profile.get("firstName")),
                last_name=self._localized(profile.get("lastName")),
                avatar_url=self._extract_picture(profile),
            )

    @staticmethod
    def _localized(field: dict | None) -> str:
        localized = field.get("localized") if isinstance(field, dict) else None
        if not isinstance(localized, dict):
            return ""
        for locale in NAME_LOCALES:
            if isinstance(localized.get(locale), str) and localized[locale]:
                return localized[locale]
        return ""

    @staticmethod
    def _extract_email(email_data: dict) -> str | None:
        try:
            email = email_data["elements"][0]["handle~"]["emailAddress"]
        except (KeyError, IndexError, TypeError):
            return None
        return email if isinstance(email, str) else None

    @staticmethod
    def _extract_picture(profile: dict) -> str | None:
        try:
            display_image = profile["profilePicture"]["displayImage~"]
            return display_image["elements"][0]["identifiers"][0]["identifier"]
        except (KeyError, IndexError, TypeError):
            return None


class MockLinkedInOAuthClient(LinkedInOAuthClient):
    """Mock LinkedIn OAuth client for testing.

    Returns deterministic test data without making real API calls. Uses the
    same email as the Google mock so cross-provider reconciliation can be
    exercised end to end.
    """

    def build_authorization_url(self, state: str | None = None) -> str:
        url = "https://www.linkedin.com/oauth/v2/authorization?mock=true"
        return f"{url}&state={state}" if state else url

    async def exchange_code(self, code: str) -> ProviderTokenSet:
        return ProviderTokenSet(access_token=f"mock-linkedin-token-{code}")

    async def fetch_identity(self, access_token: str) -> ExternalIdentity:
        return ExternalIdentity(
            provider=AuthProvider.LINKEDIN,
            subject_id="linkedin-mock-456",
            email="Mock.User@example.com",
            first_name="Mock",
            last_name="LinkedIn",
        )
