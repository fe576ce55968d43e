"""Auth redirect classification.

A redirect back into the app carries its meaning in the URL: a fragment set
by the managed-auth backend (magic link, recovery, signup confirmation) or a
query parameter set by the OAuth callback (jwt, error). The URL is parsed once
into a ClientAuthEvent and the artifacts are stripped afterwards so a refresh
does not replay it.
"""

from enum import Enum
from urllib.parse import parse_qs, parse_qsl, urlencode, urlsplit, urlunsplit

from pydantic import Field

from dip.domain.value.common import ValueObject

# Query parameters that only exist to carry a redirect outcome
AUTH_QUERY_PARAMS = frozenset({"error", "jwt", "magic", "confirmed"})
# Fragment keys set by the managed-auth backend
AUTH_FRAGMENT_KEYS = frozenset(
    {"type", "access_token", "refresh_token", "expires_in", "expires_at", "token_type"}
)


class ClientAuthEventKind(str, Enum):
    """Kinds of auth redirect the client reacts to."""

    MAGIC_LINK = "magic_link"
    PASSWORD_RECOVERY = "password_recovery"
    EMAIL_CONFIRMATION = "email_confirmation"
    OAUTH_ERROR = "oauth_error"
    BRIDGING_TOKEN = "bridging_token"
    PLAIN_SIGN_IN = "plain_sign_in"


class ClientAuthEvent(ValueObject):
    """One classified redirect. Consumed by a single dispatch."""

    kind: ClientAuthEventKind
    reason: str | None = None  # oauth_error only
    # Bridging token, or the access token of a managed-auth fragment
    token: str | None = Field(default=None, repr=False)

    @classmethod
    def magic_link(cls, token: str | None = None) -> "ClientAuthEvent":
        return cls(kind=ClientAuthEventKind.MAGIC_LINK, token=token)

    @classmethod
    def password_recovery(cls, token: str | None = None) -> "ClientAuthEvent":
        return cls(kind=ClientAuthEventKind.PASSWORD_RECOVERY, token=token)

    @classmethod
    def email_confirmation(cls, token: str | None = None) -> "ClientAuthEvent":
        return cls(kind=ClientAuthEventKind.EMAIL_CONFIRMATION, token=token)

    @classmethod
    def oauth_error(cls, reason: str) -> "ClientAuthEvent":
        return cls(kind=ClientAuthEventKind.OAUTH_ERROR, reason=reason)

    @classmethod
    def bridging_token(cls, token: str) -> "ClientAuthEvent":
        return cls(kind=ClientAuthEventKind.BRIDGING_TOKEN, token=token)

    @classmethod
    def plain_sign_in(cls) -> "ClientAuthEvent":
        return cls(kind=ClientAuthEventKind.PLAIN_SIGN_IN)


def _first(params: dict[str, list[str]], key: str) -> str | None:
    values = params.get(key)
    return values[0] if values else None


def classify(
    url: str, session_present: bool, email_confirmed: bool = False
) -> ClientAuthEvent | None:
    """Classify the page URL into at most one auth event.

    Precedence: oauth error, bridging token, recovery, magic link, signup
    confirmation, manual magic link re-entry, plain sign-in.

    Args:
        url: Full page URL
        session_present: Whether a managed-auth session exists
        email_confirmed: Whether the session user's email is confirmed

    Returns:
        The event, or None when the URL carries nothing to act on
    """
    parts = urlsplit(url)
    query = parse_qs(parts.query)
    fragment = parse_qs(parts.fragment)
    fragment_type = _first(fragment, "type")
    access_token = _first(fragment, "access_token")

    error = _first(query, "error")
    if error:
        return ClientAuthEvent.oauth_error(error)

    token = _first(query, "jwt")
    if token:
        return ClientAuthEvent.bridging_token(token)

    if fragment_type == "recovery":
        return ClientAuthEvent.password_recovery(access_token)

    if fragment_type == "magiclink":
        return ClientAuthEvent.magic_link(access_token)

    if fragment_type == "signup":
        # Unconfirmed signups are left alone until the user confirms
        return ClientAuthEvent.email_confirmation(access_token) if email_confirmed else None

    if _first(query, "magic") == "true":
        return ClientAuthEvent.magic_link()

    if session_present:
        return ClientAuthEvent.plain_sign_in()

    return None


def _without(component: str, keys: frozenset[str]) -> str:
    """Drop keys from a key/value component; anything else is kept verbatim."""
    pairs = parse_qsl(component, keep_blank_values=True)
    if not any(key in keys for key, _ in pairs):
        return component
    return urlencode([(key, value) for key, value in pairs if key not in keys])


def strip_auth_artifacts(url: str) -> str:
    """Remove redirect artifacts from a URL for a history rewrite.

    Returns a path-relative URL (path, remaining query, remaining fragment).
    Plain anchors and hash-router fragments are left as they are.
    """
    parts = urlsplit(url)

    return urlunsplit(
        (
            "",
            "",
            parts.path or "/",
            _without(parts.query, AUTH_QUERY_PARAMS),
            _without(parts.fragment, AUTH_FRAGMENT_KEYS),
        )
    )
