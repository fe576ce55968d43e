"""Unit tests for the LinkedIn OAuth client."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from dip.adapter.error import IdentityFetchError, MissingEmailError
from dip.adapter.linkedin.client import RealLinkedInOAuthClient
from dip.domain.value import AuthProvider

PROFILE = {
    "id": "AbC-123",
    "firstName": {"localized": {"tr_TR": "Ayşe"}, "preferredLocale": {"country": "TR"}},
    "lastName": {"localized": {"en_US": "Yilmaz", "tr_TR": "Yılmaz"}},
    "profilePicture": {
        "displayImage~": {
            "elements": [
                {"identifiers": [{"identifier": "https://media.licdn.com/p/100.jpg"}]}
            ]
        }
    },
}

EMAIL = {
    "elements": [
        {"handle~": {"emailAddress": "ayse@example.com"}, "handle": "urn:li:emailAddress:1"}
    ]
}


@pytest.fixture
def oauth_client() -> RealLinkedInOAuthClient:
    return RealLinkedInOAuthClient(
        client_id="linkedin-client",
        client_secret="linkedin-secret",
        redirect_uri="http://localhost:8000/auth/linkedin/callback",
    )


class TestFetchIdentity:
    @pytest.mark.asyncio
    async def test_combines_profile_and_email(self, oauth_client):
        with patch.object(
            oauth_client, "_get_json", new_callable=AsyncMock
        ) as mock_get_json:
            mock_get_json.side_effect = [PROFILE, EMAIL]

            identity = await oauth_client.fetch_identity("li-token")

        assert identity.provider == AuthProvider.LINKEDIN
        assert identity.subject_id == "AbC-123"
        assert identity.email == "ayse@example.com"
        # Turkish used when English is missing; English preferred when present
        assert identity.first_name == "Ayşe"
        assert identity.last_name == "Yilmaz"
        assert identity.avatar_url == "https://media.licdn.com/p/100.jpg"
        assert mock_get_json.await_count == 2

    @pytest.mark.asyncio
    async def test_missing_picture_is_none(self, oauth_client):
        profile = {key: value for key, value in PROFILE.items() if key != "profilePicture"}

        with patch.object(
            oauth_client, "_get_json", new_callable=AsyncMock
        ) as mock_get_json:
            mock_get_json.side_effect = [profile, EMAIL]

            identity = await oauth_client.fetch_identity("li-token")

        assert identity.avatar_url is None

    @pytest.mark.asyncio
    async def test_empty_email_elements_raise_missing_email(self, oauth_client):
        with patch.object(
            oauth_client, "_get_json", new_callable=AsyncMock
        ) as mock_get_json:
            mock_get_json.side_effect = [PROFILE, {"elements": []}]

            with pytest.raises(MissingEmailError):
                await oauth_client.fetch_identity("li-token")

    @pytest.mark.asyncio
    async def test_email_call_failure_fails_whole_fetch(self, oauth_client):
        """Both calls are required; a failed email call is not a partial identity."""
        responses = [
            httpx.Response(200, json=PROFILE),
            httpx.Response(403, json={"message": "Not enough permissions"}),
        ]

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                side_effect=responses
            )

            with pytest.raises(IdentityFetchError) as exc_info:
                await oauth_client.fetch_identity("li-token")

        assert not isinstance(exc_info.value, MissingEmailError)

    def test_authorization_url_uses_linkedin_scopes(self, oauth_client):
        url = oauth_client.build_authorization_url(state="s1")

        assert url.startswith("https://www.linkedin.com/oauth/v2/authorization?")
        assert "scope=r_liteprofile+r_emailaddress" in url

    def test_authorization_url_omits_google_only_params(self, oauth_client):
        url = oauth_client.build_authorization_url(state="s1")

        assert "access_type" not in url
        assert "prompt" not in url

    @pytest.mark.asyncio
    async def test_profile_without_id_raises_identity_fetch_error(self, oauth_client):
        profile = {key: value for key, value in PROFILE.items() if key != "id"}

        with patch.object(
            oauth_client, "_get_json", new_callable=AsyncMock
        ) as mock_get_json:
            mock_get_json.side_effect = [profile, EMAIL]

            with pytest.raises(IdentityFetchError) as exc_info:
                await oauth_client.fetch_identity("li-token")

        assert not isinstance(exc_info.value, MissingEmailError)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email_data",
        [
            {"elements": ["ayse@example.com"]},
            {"elements": [{"handle~": None}]},
            {"elements": None},
        ],
    )
    async def test_malformed_email_payload_raises_missing_email(
        self, oauth_client, email_data
    ):
        with patch.object(
            oauth_client, "_get_json", new_callable=AsyncMock
        ) as mock_get_json:
            mock_get_json.side_effect = [PROFILE, email_data]

            with pytest.raises(MissingEmailError):
                await oauth_client.fetch_identity("li-token")

    @pytest.mark.asyncio
    async def test_non_json_profile_raises_identity_fetch_error(self, oauth_client):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=httpx.Response(200, text="<html>maintenance</html>")
            )

            with pytest.raises(IdentityFetchError):
                await oauth_client.fetch_identity("li-token")
