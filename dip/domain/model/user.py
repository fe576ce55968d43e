"""User aggregate root.

The canonical local user record. Any number of external identities (Google,
LinkedIn, managed-auth sessions) map onto one record by normalized email.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from dip.domain.model.common import DomainModel
from dip.domain.value import DEFAULT_FIRST_NAME, Email, UserId, UserType


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(DomainModel):
    """Local user record - provider-agnostic.

    At most one User exists per normalized email.
    """

    id: UserId
    email: Email
    first_name: str = ""
    last_name: str = ""
    avatar_url: Optional[str] = None
    active_user_type: UserType = UserType.USER
    available_user_types: frozenset[UserType] = frozenset({UserType.USER})
    managed_user_id: Optional[str] = None  # Managed-auth backend user ID
    is_verified: bool = True
    language: str = "tr"
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    def absorb(self, candidate: "User") -> "User":
        """Merge a freshly synced candidate into this stored record.

        - non-empty names and avatar from the candidate overwrite (the
          placeholder first name never overwrites a stored one)
        - managed_user_id is only set when absent
        - available_user_types only grows
        - id, email, active_user_type and created_at never change
        - updated_at moves only when something changed

        Args:
            candidate: Record built from the latest login source

        Returns:
            This record unchanged, or an updated copy
        """
        changes = {}

        if (
            candidate.first_name not in ("", DEFAULT_FIRST_NAME)
            and candidate.first_name != self.first_name
        ):
            changes["first_name"] = candidate.first_name
        if candidate.last_name and candidate.last_name != self.last_name:
            changes["last_name"] = candidate.last_name
        if candidate.avatar_url and candidate.avatar_url != self.avatar_url:
            changes["avatar_url"] = candidate.avatar_url
        if self.managed_user_id is None and candidate.managed_user_id:
            changes["managed_user_id"] = candidate.managed_user_id
        if not candidate.available_user_types <= self.available_user_types:
            changes["available_user_types"] = (
                self.available_user_types | candidate.available_user_types
            )

        if not changes:
            return self

        changes["updated_at"] = candidate.updated_at
        return self.model_copy(update=changes)
