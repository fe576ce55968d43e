"""Domain value objects for DİP identity federation."""

from dip.domain.value.conflict import (
    ConflictAction,
    ConflictResolution,
    ConflictStatus,
    CookieInstructions,
    SessionConflictState,
)
from dip.domain.value.identifiers import UserId
from dip.domain.value.types import (
    DEFAULT_FIRST_NAME,
    AuthProvider,
    BridgingToken,
    Email,
    ExternalIdentity,
    ManagedSessionUser,
    OAuthErrorCode,
    ProviderTokenSet,
    UserType,
)

__all__ = [
    # Identifiers
    "UserId",
    # Identity types
    "DEFAULT_FIRST_NAME",
    "AuthProvider",
    "BridgingToken",
    "Email",
    "ExternalIdentity",
    "ManagedSessionUser",
    "OAuthErrorCode",
    "ProviderTokenSet",
    "UserType",
    # Session conflict
    "ConflictAction",
    "ConflictResolution",
    "ConflictStatus",
    "CookieInstructions",
    "SessionConflictState",
]
