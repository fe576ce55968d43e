"""Get current user use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from dip.domain.error import NotFoundError
from dip.domain.model import User
from dip.domain.repository import UserRepository
from dip.domain.service import SessionService
from dip.domain.value import UserId, UserType


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # Modern session token


class UserInfo(BaseModel):
    """Local user as exposed to the frontend (camelCase keys)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    email: str
    first_name: str
    last_name: str
    avatar_url: str | None
    user_type: UserType
    active_user_type: UserType
    available_user_types: list[UserType]
    is_verified: bool
    language: str
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            email=user.email.root,
            first_name=user.first_name,
            last_name=user.last_name,
            avatar_url=user.avatar_url,
            user_type=user.active_user_type,
            active_user_type=user.active_user_type,
            available_user_types=sorted(user.available_user_types, key=lambda t: t.value),
            is_verified=user.is_verified,
            language=user.language,
            created_at=user.created_at,
        )


class GetCurrentUserUseCase:
    """Use case for getting current authenticated user."""

    def __init__(
        self, session_service: SessionService, user_repository: UserRepository
    ) -> None:
        """Initialize get current user use case.

        Args:
            session_service: Session token domain service
            user_repository: User repository
        """
        self.session_service = session_service
        self.user_repository = user_repository

    async def execute(self, request: GetCurrentUserRequest) -> UserInfo:
        """Resolve the session token to the local user.

        Raises:
            JWTError: If token is invalid or expired
            NotFoundError: If user not found
        """
        payload = self.session_service.verify_token(request.token)

        user = await self.user_repository.find_by_id(UserId(UUID(payload.user_id)))
        if not user:
            raise NotFoundError("User", payload.user_id)

        return UserInfo.from_user(user)
