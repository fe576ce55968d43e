"""Complete OAuth login use case."""

import secrets
from urllib.parse import urlencode

import logfire
from pydantic import BaseModel

from dip.application.usecase.base import BaseUseCase
from dip.adapter.error import (
    IdentityFetchError,
    MissingEmailError,
    ProviderError,
    TokenExchangeError,
    UpstreamTimeout,
)
from dip.config import Settings
from dip.domain.error import SigningError
from dip.domain.service import AuthService, TokenMinter, UnsupportedProviderError
from dip.domain.value import AuthProvider, OAuthErrorCode


class CompleteOAuthLoginRequest(BaseModel):
    """Parameters of a provider callback.

    These come from the provider in the callback URL, except expected_state
    which is read from the state cookie set when the login started.
    """

    provider: AuthProvider
    code: str | None = None
    state: str | None = None
    error: str | None = None  # Provider-reported error (e.g. access_denied)
    expected_state: str | None = None


class CompleteOAuthLoginResponse(BaseModel):
    """Where to send the browser after the callback."""

    redirect_url: str
    error_code: OAuthErrorCode | None = None

    @property
    def succeeded(self) -> bool:
        return self.error_code is None


class CompleteOAuthLoginUseCase(BaseUseCase):
    """Use case turning a provider callback into a bridging token redirect.

    Every outcome is a redirect to the frontend auth page, carrying either the
    bridging token or one of the closed set of error codes. Upstream detail is
    logged here and never forwarded to the browser.
    """

    def __init__(
        self,
        auth_service: AuthService,
        token_minter: TokenMinter,
        settings: Settings,
    ) -> None:
        """Initialize complete OAuth login use case.

        Args:
            auth_service: Authentication domain service (handles all providers)
            token_minter: Bridging token minter
            settings: Application settings
        """
        self.auth_service = auth_service
        self.token_minter = token_minter
        self.settings = settings

    async def execute(
        self, request: CompleteOAuthLoginRequest
    ) -> CompleteOAuthLoginResponse:
        """Execute the callback flow.

        Steps:
        1. Map a provider-reported error (user cancel or otherwise)
        2. Verify the state against the state cookie
        3. Exchange the code and fetch the identity
        4. Mint the bridging token

        Args:
            request: Callback parameters

        Returns:
            Redirect to the frontend with either jwt or error
        """
        provider = request.provider.value

        with logfire.span("complete_oauth_login", provider=provider):
            if request.error:
                logfire.info("Provider reported error", provider=provider, error=request.error)
                if request.error == "access_denied":
                    return self._fail(OAuthErrorCode.OAUTH_CANCELED)
                return self._fail(OAuthErrorCode.OAUTH_FAILED)

            if not request.code:
                logfire.warn("Callback without code", provider=provider)
                return self._fail(OAuthErrorCode.OAUTH_FAILED)

            if not self._state_matches(request.state, request.expected_state):
                logfire.warn("OAuth state mismatch", provider=provider)
                return self._fail(OAuthErrorCode.OAUTH_FAILED)

            try:
                identity = await self.auth_service.authenticate(
                    request.provider, request.code
                )
            except TokenExchangeError as e:
                if e.is_invalid_grant:
                    logfire.warn("Authorization code already used or expired", provider=provider)
                    return self._fail(OAuthErrorCode.LOGIN_FAILED)
                return self._fail(OAuthErrorCode.OAUTH_FAILED)
            except MissingEmailError:
                return self._fail(OAuthErrorCode.USER_NOT_FOUND)
            except (IdentityFetchError, UpstreamTimeout, ProviderError, UnsupportedProviderError) as e:
                logfire.warn("OAuth login failed", provider=provider, error=str(e))
                return self._fail(OAuthErrorCode.OAUTH_FAILED)

            try:
                bridging_token = self.token_minter.mint(identity)
            except SigningError as e:
                logfire.error("Bridging token signing failed", error=str(e))
                return self._fail(OAuthErrorCode.LOGIN_FAILED)

            logfire.info("OAuth login completed", provider=provider)
            return CompleteOAuthLoginResponse(
                redirect_url=self._redirect({"jwt": bridging_token.token})
            )

    @staticmethod
    def _state_matches(state: str | None, expected_state: str | None) -> bool:
        if not state or not expected_state:
            return False
        return secrets.compare_digest(state, expected_state)

    def _redirect(self, params: dict[str, str]) -> str:
        return f"{self.settings.api.frontend_url}/auth?{urlencode(params)}"

    def _fail(self, code: OAuthErrorCode) -> CompleteOAuthLoginResponse:
        return CompleteOAuthLoginResponse(
            redirect_url=self._redirect({"error": code.value}),
            error_code=code,
        )
