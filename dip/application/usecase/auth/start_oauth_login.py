"""Start OAuth login use case."""

import secrets

from pydantic import BaseModel

from dip.domain.service import AuthService
from dip.domain.value import AuthProvider


class StartOAuthLoginRequest(BaseModel):
    """Start OAuth login request."""

    provider: AuthProvider


class StartOAuthLoginResponse(BaseModel):
    """Authorization URL plus the state the callback must echo back."""

    authorization_url: str
    state: str


class StartOAuthLoginUseCase:
    """Use case for sending a user to a provider's consent screen."""

    def __init__(self, auth_service: AuthService) -> None:
        self.auth_service = auth_service

    async def execute(self, request: StartOAuthLoginRequest) -> StartOAuthLoginResponse:
        """Generate state and build the provider authorization URL.

        Raises:
            UnsupportedProviderError: If provider has no OAuth client
        """
        state = secrets.token_urlsafe(32)
        url = self.auth_service.build_authorization_url(request.provider, state)
        return StartOAuthLoginResponse(authorization_url=url, state=state)
