"""Client SDK for DİP auth redirects, sync and session conflicts."""

from .backend import ManagedAuthBackend, ManagedAuthError, ManagedSession, SupabaseAuthBackend
from .events import ClientAuthEvent, ClientAuthEventKind, classify, strip_auth_artifacts
from .interpreter import AuthRedirectInterpreter
from .ports import BrowserPort, FlashMarker
from .session import SessionConflictClient, SignOutClient
from .state import AuthEventType, AuthSnapshot
from .sync import SyncClient, SyncOutcome, SyncRetryBudget

__all__ = [
    "AuthEventType",
    "AuthRedirectInterpreter",
    "AuthSnapshot",
    "BrowserPort",
    "ClientAuthEvent",
    "ClientAuthEventKind",
    "FlashMarker",
    "ManagedAuthBackend",
    "ManagedAuthError",
    "ManagedSession",
    "SessionConflictClient",
    "SignOutClient",
    "SupabaseAuthBackend",
    "SyncClient",
    "SyncOutcome",
    "SyncRetryBudget",
    "classify",
    "strip_auth_artifacts",
]
