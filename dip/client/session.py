"""Client side of legacy/modern session conflict resolution."""

import httpx
import logfire

from dip.client.backend import ManagedAuthBackend, ManagedAuthError
from dip.client.ports import BrowserPort
from dip.client.state import AuthEventType, AuthSnapshot
from dip.domain.value import ConflictAction, ConflictResolution

RESOLVE_PATH = "/api/auth/resolve-session-conflict"
LOGOUT_PATH = "/api/auth/logout"
LOGIN_PATH = "/login"


class SessionConflictClient:
    """Asks the API about session conflicts and applies the answer.

    Fails open: if the check itself fails the page proceeds as if there were
    no conflict.
    """

    def __init__(self, http_client: httpx.AsyncClient, browser: BrowserPort) -> None:
        self.http_client = http_client
        self.browser = browser

    async def check(self) -> ConflictResolution:
        try:
            response = await self.http_client.post(RESOLVE_PATH)
            response.raise_for_status()
            return ConflictResolution.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logfire.warn("Session conflict check failed", error=str(e))
            return ConflictResolution.none()

    async def resolve(self) -> bool:
        """Check for a conflict and act on it.

        Returns:
            True when the page may proceed, False when a login is required
        """
        resolution = await self.check()
        if not resolution.conflict:
            return True

        if resolution.action is ConflictAction.CLEAR_PHP_SESSION:
            if resolution.instructions:
                self.browser.expire_cookie(
                    resolution.instructions.cookie_to_clear,
                    resolution.instructions.domain,
                    resolution.instructions.path,
                )
            logfire.info("Legacy session cleared")
            return True

        if resolution.action is ConflictAction.REQUIRE_LOGIN:
            self.browser.navigate(LOGIN_PATH)
            return False

        return True


class SignOutClient:
    """Ends both the managed-auth session and the API session cookie.

    The local state is always signed out; failures on either side are
    logged and do not keep the user signed in.
    """

    def __init__(self, http_client: httpx.AsyncClient, backend: ManagedAuthBackend) -> None:
        self.http_client = http_client
        self.backend = backend

    async def sign_out(self, snapshot: AuthSnapshot) -> AuthSnapshot:
        """Sign out and return the signed-out snapshot."""
        if snapshot.session is not None:
            try:
                await self.backend.sign_out(snapshot.session.access_token)
            except ManagedAuthError as e:
                logfire.warn("Managed-auth sign-out failed", error=str(e))

        signed_out = snapshot.apply(AuthEventType.SIGNED_OUT)

        try:
            response = await self.http_client.post(LOGOUT_PATH)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logfire.warn("API logout failed", error=str(e))

        return signed_out
