"""Domain services."""

from .auth_service import AuthService, OAuthClient, UnsupportedProviderError
from .base import Service
from .identity_sync_service import IdentitySyncService
from .session_conflict_service import SessionConflictResolver
from .session_service import SessionService
from .token_minter import TokenMinter

__all__ = [
    "AuthService",
    "IdentitySyncService",
    "OAuthClient",
    "Service",
    "SessionConflictResolver",
    "SessionService",
    "TokenMinter",
    "UnsupportedProviderError",
]
