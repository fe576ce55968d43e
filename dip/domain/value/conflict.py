"""Session conflict value objects.

A legacy session cookie and the modern session cookie can coexist on the
shared parent domain. These values describe what was observed on a request
and what the client should do about it.
"""

from enum import Enum

from dip.domain.value.common import ValueObject


class ConflictStatus(str, Enum):
    """Derived state of the two session indicators."""

    NO_CONFLICT = "no_conflict"
    LEGACY_ONLY = "legacy_only"
    BOTH_PRESENT = "both_present"


class ConflictAction(str, Enum):
    """Action the client must take to reconcile sessions."""

    CLEAR_PHP_SESSION = "clear_php_session"
    REQUIRE_LOGIN = "require_login"


class SessionConflictState(ValueObject):
    """Cookies observed on one request. Computed per request, never stored."""

    legacy_cookie_present: bool
    modern_cookie_present: bool
    domain: str | None = None

    @property
    def status(self) -> ConflictStatus:
        if self.legacy_cookie_present and self.modern_cookie_present:
            return ConflictStatus.BOTH_PRESENT
        if self.legacy_cookie_present:
            return ConflictStatus.LEGACY_ONLY
        return ConflictStatus.NO_CONFLICT


class CookieInstructions(ValueObject):
    """Exact cookie the client must expire."""

    cookie_to_clear: str
    domain: str | None
    path: str


class ConflictResolution(ValueObject):
    """Outcome of session conflict resolution."""

    conflict: bool
    action: ConflictAction | None = None
    message: str | None = None
    instructions: CookieInstructions | None = None

    @classmethod
    def none(cls) -> "ConflictResolution":
        return cls(conflict=False)
