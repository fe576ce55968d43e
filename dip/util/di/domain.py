"""Domain layer DI providers."""

from dishka import Scope, provide

from dip.config import AuthSettings, SessionSettings
from dip.domain.repository import UserRepository
from dip.domain.service import (
    AuthService,
    IdentitySyncService,
    OAuthClient,
    SessionConflictResolver,
    SessionService,
    TokenMinter,
)
from dip.domain.value import AuthProvider
from dip.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(
        self, oauth_clients: dict[AuthProvider, OAuthClient]
    ) -> AuthService:
        """Provide multi-provider authentication domain service.

        Args:
            oauth_clients: Dictionary mapping providers to their OAuth clients

        Returns:
            AuthService configured with all available OAuth clients
        """
        return AuthService(oauth_clients=oauth_clients)

    @provide
    def get_token_minter(self, auth_settings: AuthSettings) -> TokenMinter:
        """Provide bridging token minter."""
        return TokenMinter(auth_settings=auth_settings)

    @provide
    def get_session_service(self, auth_settings: AuthSettings) -> SessionService:
        """Provide session token domain service."""
        return SessionService(auth_settings=auth_settings)

    @provide
    def get_identity_sync_service(
        self, user_repository: UserRepository
    ) -> IdentitySyncService:
        """Provide identity sync domain service."""
        return IdentitySyncService(user_repository=user_repository)

    @provide
    def get_session_conflict_resolver(
        self, session_settings: SessionSettings
    ) -> SessionConflictResolver:
        """Provide session conflict resolver."""
        return SessionConflictResolver(
            legacy_cookie_name=session_settings.legacy_cookie_name,
            cookie_path=session_settings.cookie_path,
        )
