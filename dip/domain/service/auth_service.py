"""Authentication domain service (OAuth gateway)."""

import logfire

from dip.domain.value import AuthProvider, ExternalIdentity, ProviderTokenSet

from .base import Service


class UnsupportedProviderError(ValueError):
    """No OAuth client is registered for the requested provider."""

    pass


class OAuthClient:
    """Capability set every OAuth provider implements.

    Adding a provider means adding one implementation and registering it in
    the lookup table; callers do not change.
    """

    def build_authorization_url(self, state: str | None = None) -> str:
        """Build the provider's authorization endpoint URL.

        Args:
            state: Optional opaque state for CSRF binding

        Returns:
            Authorization URL to redirect the user to
        """
        raise NotImplementedError

    async def exchange_code(self, code: str) -> ProviderTokenSet:
        """Exchange an authorization code for tokens.

        Args:
            code: Single-use authorization code from the callback

        Returns:
            Provider token set

        Raises:
            TokenExchangeError: If the provider rejects the code
            UpstreamTimeout: If the provider does not answer in time
        """
        raise NotImplementedError

    async def fetch_identity(self, access_token: str) -> ExternalIdentity:
        """Fetch the user's identity from the provider.

        Args:
            access_token: Provider access token

        Returns:
            External identity with a verified email

        Raises:
            IdentityFetchError: If any required call fails or email is missing
            UpstreamTimeout: If the provider does not answer in time
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service for multi-provider OAuth operations.

    Selects the provider implementation from a lookup table and never
    branches on provider names itself.
    """

    def __init__(self, oauth_clients: dict[AuthProvider, OAuthClient]) -> None:
        """Initialize auth service.

        Args:
            oauth_clients: Map of provider to OAuth client implementation
        """
        self.oauth_clients = oauth_clients

    def _client(self, provider: AuthProvider) -> OAuthClient:
        client = self.oauth_clients.get(provider)
        if not client:
            raise UnsupportedProviderError(f"Unsupported provider: {provider}")
        return client

    def build_authorization_url(
        self, provider: AuthProvider, state: str | None = None
    ) -> str:
        """Build the authorization URL for a provider.

        Raises:
            UnsupportedProviderError: If provider not supported
        """
        url = self._client(provider).build_authorization_url(state)
        logfire.info("Authorization URL built", provider=provider.value)
        return url

    async def exchange_code(
        self, provider: AuthProvider, code: str
    ) -> ProviderTokenSet:
        """Exchange an authorization code with a provider.

        Raises:
            UnsupportedProviderError: If provider not supported
        """
        return await self._client(provider).exchange_code(code)

    async def fetch_identity(
        self, provider: AuthProvider, access_token: str
    ) -> ExternalIdentity:
        """Fetch an identity from a provider.

        Raises:
            UnsupportedProviderError: If provider not supported
        """
        return await self._client(provider).fetch_identity(access_token)

    async def authenticate(self, provider: AuthProvider, code: str) -> ExternalIdentity:
        """Run the exchange + identity fetch chain for one callback.

        Args:
            provider: Provider that issued the code
            code: Authorization code

        Returns:
            Verified external identity
        """
        with logfire.span("auth_service.authenticate", provider=provider.value):
            token_set = await self.exchange_code(provider, code)
            identity = await self.fetch_identity(provider, token_set.access_token)
            logfire.info(
                "Provider identity fetched",
                provider=provider.value,
                subject_id=identity.subject_id,
            )
            return identity
