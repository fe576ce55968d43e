"""Client auth state machine.

The auth state is an immutable snapshot, replaced only by applying a named
event. Nothing else mutates it.
"""

from enum import Enum
from typing import Any

from dip.client.backend import ManagedSession
from dip.domain.value.common import ValueObject


class AuthEventType(str, Enum):
    """Events that move the client auth state."""

    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    PASSWORD_RECOVERY = "PASSWORD_RECOVERY"
    SYNC_SUCCEEDED = "SYNC_SUCCEEDED"
    SYNC_FAILED = "SYNC_FAILED"


class AuthSnapshot(ValueObject):
    """Client auth state at one point in time."""

    session: ManagedSession | None = None
    user: dict[str, Any] | None = None  # Local user record as returned by sync
    is_connected: bool = True
    recovering: bool = False
    error: str | None = None

    @property
    def signed_in(self) -> bool:
        return self.session is not None

    def apply(
        self,
        event: AuthEventType,
        *,
        session: ManagedSession | None = None,
        user: dict[str, Any] | None = None,
        error: str | None = None,
    ) -> "AuthSnapshot":
        """Return the snapshot that follows this one after event.

        Raises:
            ValueError: If the event is missing its required payload
        """
        if event is AuthEventType.SIGNED_IN:
            if session is None:
                raise ValueError("SIGNED_IN requires a session")
            return AuthSnapshot(session=session, user=self.user if self._same_user(session) else None)

        if event is AuthEventType.SIGNED_OUT:
            return AuthSnapshot()

        if event is AuthEventType.TOKEN_REFRESHED:
            if session is None:
                raise ValueError("TOKEN_REFRESHED requires a session")
            return self.model_copy(update={"session": session})

        if event is AuthEventType.PASSWORD_RECOVERY:
            return self.model_copy(
                update={"session": session or self.session, "recovering": True}
            )

        if event is AuthEventType.SYNC_SUCCEEDED:
            if user is None:
                raise ValueError("SYNC_SUCCEEDED requires a user")
            return self.model_copy(
                update={"user": user, "is_connected": True, "error": None}
            )

        if event is AuthEventType.SYNC_FAILED:
            return self.model_copy(update={"is_connected": False, "error": error})

        raise ValueError(f"Unknown auth event: {event}")

    def _same_user(self, session: ManagedSession) -> bool:
        return self.session is not None and self.session.user.id == session.user.id
