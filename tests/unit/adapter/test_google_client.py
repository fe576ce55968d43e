"""Unit tests for the Google OAuth client."""

from unittest.mock import AsyncMock, patch
from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from dip.adapter.error import (
    IdentityFetchError,
    MissingEmailError,
    TokenExchangeError,
    UpstreamTimeout,
)
from dip.adapter.google.client import RealGoogleOAuthClient
from dip.domain.value import AuthProvider


@pytest.fixture
def oauth_client() -> RealGoogleOAuthClient:
    return RealGoogleOAuthClient(
        client_id="google-client",
        client_secret="google-secret",
        redirect_uri="http://localhost:8000/auth/google/callback",
    )


class TestBuildAuthorizationUrl:
    def test_includes_client_scope_and_state(self, oauth_client):
        url = oauth_client.build_authorization_url(state="xyz")

        parsed = urlparse(url)
        params = parse_qs(parsed.query)
        assert parsed.netloc == "accounts.google.com"
        assert params["client_id"] == ["google-client"]
        assert params["redirect_uri"] == ["http://localhost:8000/auth/google/callback"]
        assert params["scope"] == ["openid email profile"]
        assert params["response_type"] == ["code"]
        assert params["access_type"] == ["offline"]
        assert params["prompt"] == ["consent"]
        assert params["state"] == ["xyz"]

    def test_omits_state_when_not_given(self, oauth_client):
        assert "state=" not in oauth_client.build_authorization_url()


class TestExchangeCode:
    @pytest.mark.asyncio
    async def test_returns_token_set(self, oauth_client):
        response = httpx.Response(
            200, json={"access_token": "ya29.token", "expires_in": 3599, "token_type": "Bearer"}
        )

        with patch("httpx.AsyncClient") as mock_client:
            post = AsyncMock(return_value=response)
            mock_client.return_value.__aenter__.return_value.post = post

            token_set = await oauth_client.exchange_code("auth-code")

        assert token_set.access_token == "ya29.token"
        assert token_set.expires_in == 3599
        sent = post.call_args.kwargs["data"]
        assert sent["grant_type"] == "authorization_code"
        assert sent["code"] == "auth-code"

    @pytest.mark.asyncio
    async def test_invalid_grant_is_flagged(self, oauth_client):
        response = httpx.Response(
            400, json={"error": "invalid_grant", "error_description": "Bad Request"}
        )

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                return_value=response
            )

            with pytest.raises(TokenExchangeError) as exc_info:
                await oauth_client.exchange_code("used-code")

        assert exc_info.value.is_invalid_grant
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_non_json_error_body(self, oauth_client):
        response = httpx.Response(502, text="<html>Bad Gateway</html>")

        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                return_value=response
            )

            with pytest.raises(TokenExchangeError) as exc_info:
                await oauth_client.exchange_code("code")

        assert exc_info.value.error_code is None
        assert not exc_info.value.is_invalid_grant

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, text="<html>oops</html>"),
            httpx.Response(200, json=["access_token", "ya29.token"]),
            httpx.Response(200, json={"token_type": "Bearer"}),
        ],
    )
    async def test_malformed_success_body_raises_token_exchange_error(
        self, oauth_client, response
    ):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                return_value=response
            )

            with pytest.raises(TokenExchangeError) as exc_info:
                await oauth_client.exchange_code("code")

        assert exc_info.value.status_code == 200
        assert not exc_info.value.is_invalid_grant

    @pytest.mark.asyncio
    async def test_timeout_raises_upstream_timeout(self, oauth_client):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.post = AsyncMock(
                side_effect=httpx.ReadTimeout("timed out")
            )

            with pytest.raises(UpstreamTimeout):
                await oauth_client.exchange_code("code")


class TestFetchIdentity:
    @pytest.mark.asyncio
    async def test_maps_userinfo_to_identity(self, oauth_client):
        userinfo = {
            "id": "109876543210",
            "email": "Ayse@Example.com",
            "given_name": "Ayşe",
            "family_name": "Yılmaz",
            "picture": "https://lh3.googleusercontent.com/a/p.jpg",
        }

        with patch.object(
            oauth_client, "_get_json", new_callable=AsyncMock
        ) as mock_get_json:
            mock_get_json.return_value = userinfo

            identity = await oauth_client.fetch_identity("ya29.token")

        assert identity.provider == AuthProvider.GOOGLE
        assert identity.subject_id == "109876543210"
        assert identity.email == "Ayse@Example.com"
        assert identity.first_name == "Ayşe"
        assert identity.last_name == "Yılmaz"
        assert identity.avatar_url == userinfo["picture"]

    @pytest.mark.asyncio
    async def test_missing_names_become_empty(self, oauth_client):
        with patch.object(
            oauth_client, "_get_json", new_callable=AsyncMock
        ) as mock_get_json:
            mock_get_json.return_value = {"id": "1", "email": "x@example.com"}

            identity = await oauth_client.fetch_identity("token")

        assert identity.first_name == ""
        assert identity.last_name == ""
        assert identity.avatar_url is None

    @pytest.mark.asyncio
    async def test_missing_email_raises(self, oauth_client):
        with patch.object(
            oauth_client, "_get_json", new_callable=AsyncMock
        ) as mock_get_json:
            mock_get_json.return_value = {"id": "1", "given_name": "No"}

            with pytest.raises(MissingEmailError):
                await oauth_client.fetch_identity("token")

    @pytest.mark.asyncio
    async def test_userinfo_failure_raises_identity_fetch_error(self, oauth_client):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=httpx.Response(401, json={"error": "invalid_token"})
            )

            with pytest.raises(IdentityFetchError):
                await oauth_client.fetch_identity("expired-token")

    @pytest.mark.asyncio
    async def test_userinfo_without_id_raises_identity_fetch_error(self, oauth_client):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=httpx.Response(200, json={"email": "a@example.com"})
            )

            with pytest.raises(IdentityFetchError) as exc_info:
                await oauth_client.fetch_identity("token")

        assert not isinstance(exc_info.value, MissingEmailError)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, text="<html>oops</html>"),
            httpx.Response(200, json=[{"id": "1", "email": "a@example.com"}]),
        ],
    )
    async def test_malformed_userinfo_raises_identity_fetch_error(
        self, oauth_client, response
    ):
        with patch("httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                return_value=response
            )

            with pytest.raises(IdentityFetchError):
                await oauth_client.fetch_identity("token")
