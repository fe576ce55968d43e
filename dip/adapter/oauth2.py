"""Shared OAuth 2.0 authorization-code client.

Google and LinkedIn differ only in endpoints, scopes and the shape of their
identity payloads, so the HTTP handling lives here once.
"""

from urllib.parse import urlencode

import httpx
import logfire

from dip.adapter.error import IdentityFetchError, TokenExchangeError, UpstreamTimeout
from dip.domain.service.auth_service import OAuthClient
from dip.domain.value import AuthProvider, ExternalIdentity, ProviderTokenSet


class OAuth2ProviderClient(OAuthClient):
    """Authorization-code flow against a standard OAuth 2.0 provider.

    Subclasses set the endpoint attributes and implement ``fetch_identity``.
    """

    provider: AuthProvider
    authorize_url: str
    token_url: str
    scope: str
    extra_authorize_params: dict[str, str] = {}

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        timeout: float = 10.0,
    ) -> None:
        """Initialize OAuth client.

        Args:
            client_id: OAuth client ID
            client_secret: OAuth client secret
            redirect_uri: Callback URL registered with the provider
            timeout: Per-request timeout in seconds
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.timeout = timeout

    def build_authorization_url(self, state: str | None = None) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": self.scope,
            "response_type": "code",
            **self.extra_authorize_params,
        }
        if state:
            params["state"] = state

        return f"{self.authorize_url}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> ProviderTokenSet:
        """Exchange authorization code for tokens.

        Authorization codes are single-use, so a failed exchange is never
        retried here.

        Raises:
            TokenExchangeError: If the provider answers with a non-2xx status
            UpstreamTimeout: If the provider does not answer in time
        """
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "grant_type": "authorization_code",
            "redirect_uri": self.redirect_uri,
        }

        with logfire.span("oauth2.exchange_code", provider=self.provider.value):
            try:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(
                        self.token_url,
                        data=data,
                        headers={"Accept": "application/json"},
                    )
            except httpx.TimeoutException as e:
                logfire.error(
                    "Token exchange timed out", provider=self.provider.value
                )
                raise UpstreamTimeout(self.provider.value, "Token exchange timed out") from e
            except httpx.HTTPError as e:
                logfire.error(
                    "Token exchange HTTP error",
                    provider=self.provider.value,
                    error=str(e),
                )
                raise TokenExchangeError(self.provider.value, None, str(e)) from e

            if not response.is_success:
                error_code = self._parse_error_code(response)
                logfire.error(
                    "Token exchange failed",
                    provider=self.provider.value,
                    status_code=response.status_code,
                    error_code=error_code,
                    body=response.text,
                )
                raise TokenExchangeError(
                    self.provider.value,
                    response.status_code,
                    response.text,
                    error_code,
                )

            try:
                return ProviderTokenSet(**response.json())
            except (TypeError, ValueError) as e:
                logfire.error(
                    "Token exchange returned malformed body",
                    provider=self.provider.value,
                    body=response.text,
                )
                raise TokenExchangeError(
                    self.provider.value, response.status_code, response.text
                ) from e

    async def fetch_identity(self, access_token: str) -> ExternalIdentity:
        raise NotImplementedError

    async def _get_json(self, url: str, access_token: str, what: str) -> dict:
        """GET a JSON resource with a bearer token.

        Args:
            url: Resource URL
            access_token: Provider access token
            what: Short description for logs and errors

        Raises:
            IdentityFetchError: If the request fails, is not 2xx or the body
                is not a JSON object
            UpstreamTimeout: If the provider does not answer in time
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(
                    url,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
        except httpx.TimeoutException as e:
            logfire.error(f"{what} request timed out", provider=self.provider.value)
            raise UpstreamTimeout(self.provider.value, f"{what} request timed out") from e
        except httpx.HTTPError as e:
            logfire.error(
                f"{what} HTTP error", provider=self.provider.value, error=str(e)
            )
            raise IdentityFetchError(self.provider.value, f"HTTP error fetching {what}") from e

        if not response.is_success:
            logfire.error(
                f"{what} request failed",
                provider=self.provider.value,
                status_code=response.status_code,
                body=response.text,
            )
            raise IdentityFetchError(
                self.provider.value,
                f"Failed to fetch {what}: {response.status_code}",
            )

        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            logfire.error(
                f"{what} returned malformed body",
                provider=self.provider.value,
                body=response.text,
            )
            raise IdentityFetchError(self.provider.value, f"Malformed {what} response")

        return data

    @staticmethod
    def _parse_error_code(response: httpx.Response) -> str | None:
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            error = body.get("error")
            return error if isinstance(error, str) else None
        return None
