"""Domain value objects for DİP identity federation.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and normalization.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from dip.domain.value.common import RootValueObject, ValueObject

DEFAULT_FIRST_NAME = "User"


class AuthProvider(str, Enum):
    """Identity sources that can be federated into a local user."""

    GOOGLE = "google"
    LINKEDIN = "linkedin"
    MANAGED = "managed"


class UserType(str, Enum):
    """Account-type capabilities of a local user."""

    USER = "user"
    PARTNER = "partner"
    MASTER_ADMIN = "master_admin"
    EDITOR_ADMIN = "editor_admin"


class OAuthErrorCode(str, Enum):
    """Closed set of error codes sent to the browser on a failed callback."""

    OAUTH_CANCELED = "oauth_canceled"
    OAUTH_FAILED = "oauth_failed"
    LOGIN_FAILED = "login_failed"
    USER_NOT_FOUND = "user_not_found"


class Email(RootValueObject[str]):
    """Normalized email address (trimmed, lowercased).

    Two addresses that differ only in case or surrounding whitespace are the
    same Email, which is what makes one local user per email enforceable.
    """

    @field_validator("root")
    @classmethod
    def normalize(cls, v: str) -> str:
        """Trim and lowercase, then check basic shape."""
        normalized = v.strip().lower()
        local, _, domain = normalized.partition("@")
        if not local or not domain or len(normalized) > 255:
            raise ValueError("Invalid email address")
        return normalized


class ProviderTokenSet(ValueObject):
    """Tokens returned by a provider's token endpoint."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int | None = None
    refresh_token: str | None = None
    id_token: str | None = None
    scope: str | None = None


class ExternalIdentity(ValueObject):
    """Identity asserted by an external provider for one login attempt.

    Produced per authentication attempt; never persisted verbatim.
    """

    provider: AuthProvider
    subject_id: str  # Provider's permanent user ID
    email: str
    first_name: str = ""
    last_name: str = ""
    avatar_url: str | None = None

    @property
    def bridging_subject(self) -> str:
        """Provider-namespaced subject used in bridging tokens."""
        return f"oauth_{self.provider.value}_{self.subject_id}"


class ManagedSessionUser(ValueObject):
    """User object of a managed-auth backend session."""

    id: str
    email: str
    user_metadata: dict[str, Any] = Field(default_factory=dict)
    app_metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def first_name(self) -> str:
        meta = self.user_metadata
        name = meta.get("firstName") or meta.get("first_name")
        if name:
            return str(name)
        full_name = str(meta.get("full_name") or "").split()
        return full_name[0] if full_name else ""

    @property
    def last_name(self) -> str:
        meta = self.user_metadata
        name = meta.get("lastName") or meta.get("last_name")
        if name:
            return str(name)
        full_name = str(meta.get("full_name") or "").split()
        return " ".join(full_name[1:])

    @property
    def avatar_url(self) -> str | None:
        return self.user_metadata.get("avatar_url") or None


class BridgingToken(ValueObject):
    """Signed, time-boxed assertion accepted by the managed-auth backend.

    Exists only in transit (callback redirect query parameter).
    """

    subject: str
    email: str
    issued_at: datetime
    expires_at: datetime
    metadata: dict[str, Any]
    token: str = Field(repr=False)
