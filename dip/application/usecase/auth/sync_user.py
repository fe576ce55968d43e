"""Sync managed-auth user use case."""

import logfire
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from dip.application.usecase.base import BaseUseCase
from dip.domain.service import IdentitySyncService, SessionService
from dip.domain.value import ManagedSessionUser

from .get_current_user import UserInfo


class SyncUserRequest(BaseModel):
    """Body of the sync call: the managed-auth session's user object."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    supabase_user: ManagedSessionUser


class SyncUserResponse(BaseModel):
    """Synced local user plus the modern session token to set as a cookie."""

    user: UserInfo
    session_token: str


class SyncUserUseCase(BaseUseCase):
    """Use case for reconciling a managed-auth session into the local user.

    One attempt per request; the client owns any retry.
    """

    def __init__(
        self,
        identity_sync_service: IdentitySyncService,
        session_service: SessionService,
    ) -> None:
        """Initialize sync user use case.

        Args:
            identity_sync_service: Identity sync domain service
            session_service: Session token domain service
        """
        self.identity_sync_service = identity_sync_service
        self.session_service = session_service

    async def execute(self, request: SyncUserRequest) -> SyncUserResponse:
        """Upsert the local user and issue a session token.

        Raises:
            ValidationError: If the session user has no usable email
            SyncError: If the upsert fails
        """
        with logfire.span("sync_user", managed_user_id=request.supabase_user.id):
            user = await self.identity_sync_service.sync_user(request.supabase_user)
            token = self.session_service.create_token(str(user.id), user.email.root)
            return SyncUserResponse(user=UserInfo.from_user(user), session_token=token)
