"""Authentication use cases."""

from .complete_oauth_login import (
    CompleteOAuthLoginRequest,
    CompleteOAuthLoginResponse,
    CompleteOAuthLoginUseCase,
)
from .get_current_user import GetCurrentUserRequest, GetCurrentUserUseCase, UserInfo
from .resolve_session_conflict import (
    ResolveSessionConflictRequest,
    ResolveSessionConflictUseCase,
)
from .start_oauth_login import (
    StartOAuthLoginRequest,
    StartOAuthLoginResponse,
    StartOAuthLoginUseCase,
)
from .sync_user import SyncUserRequest, SyncUserResponse, SyncUserUseCase

__all__ = [
    "CompleteOAuthLoginRequest",
    "CompleteOAuthLoginResponse",
    "CompleteOAuthLoginUseCase",
    "GetCurrentUserRequest",
    "GetCurrentUserUseCase",
    "ResolveSessionConflictRequest",
    "ResolveSessionConflictUseCase",
    "StartOAuthLoginRequest",
    "StartOAuthLoginResponse",
    "StartOAuthLoginUseCase",
    "SyncUserRequest",
    "SyncUserResponse",
    "SyncUserUseCase",
    "UserInfo",
]
