"""Application layer DI providers."""

from dishka import Scope, provide

from dip.application.usecase.auth import (
    CompleteOAuthLoginUseCase,
    GetCurrentUserUseCase,
    ResolveSessionConflictUseCase,
    StartOAuthLoginUseCase,
    SyncUserUseCase,
)
from dip.config import Settings
from dip.domain.repository import UserRepository
from dip.domain.service import (
    AuthService,
    IdentitySyncService,
    SessionConflictResolver,
    SessionService,
    TokenMinter,
)
from dip.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_start_oauth_login_use_case(
        self, auth_service: AuthService
    ) -> StartOAuthLoginUseCase:
        """Provide start OAuth login use case."""
        return StartOAuthLoginUseCase(auth_service=auth_service)

    @provide(scope=Scope.REQUEST)
    def get_complete_oauth_login_use_case(
        self,
        auth_service: AuthService,
        token_minter: TokenMinter,
        settings: Settings,
    ) -> CompleteOAuthLoginUseCase:
        """Provide complete OAuth login use case."""
        return CompleteOAuthLoginUseCase(
            auth_service=auth_service,
            token_minter=token_minter,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_sync_user_use_case(
        self,
        identity_sync_service: IdentitySyncService,
        session_service: SessionService,
    ) -> SyncUserUseCase:
        """Provide sync user use case."""
        return SyncUserUseCase(
            identity_sync_service=identity_sync_service,
            session_service=session_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_resolve_session_conflict_use_case(
        self,
        resolver: SessionConflictResolver,
        session_service: SessionService,
    ) -> ResolveSessionConflictUseCase:
        """Provide resolve session conflict use case."""
        return ResolveSessionConflictUseCase(
            resolver=resolver, session_service=session_service
        )

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self,
        session_service: SessionService,
        user_repository: UserRepository,
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(
            session_service=session_service, user_repository=user_repository
        )
