"""Auth redirect interpreter.

Classifies the page URL once on mount and runs exactly one handler for it.
Handlers are looked up by event kind; construction fails if any kind lacks a
handler, so a new kind cannot be silently ignored.
"""

import asyncio
from collections.abc import Awaitable, Callable

import logfire

from dip.client.backend import ManagedAuthBackend, ManagedAuthError, ManagedSession
from dip.client.events import (
    ClientAuthEvent,
    ClientAuthEventKind,
    classify,
    strip_auth_artifacts,
)
from dip.client.messages import (
    DEFAULT_LANGUAGE,
    error_title,
    oauth_error_message,
    sync_failed_message,
    sync_failed_title,
)
from dip.client.ports import BrowserPort, FlashMarker
from dip.client.state import AuthEventType, AuthSnapshot
from dip.client.sync import SyncClient, SyncRetryBudget
from dip.domain.value import OAuthErrorCode

Handler = Callable[[ClientAuthEvent], Awaitable[None]]

HOME_PATH = "/"
PASSWORD_RESET_PATH = "/password-reset"


class AuthRedirectInterpreter:
    """Turns one auth redirect into navigation, messages and a sync call."""

    def __init__(
        self,
        browser: BrowserPort,
        backend: ManagedAuthBackend,
        sync_client: SyncClient,
        snapshot: AuthSnapshot | None = None,
        language: str = DEFAULT_LANGUAGE,
    ) -> None:
        self.browser = browser
        self.backend = backend
        self.sync_client = sync_client
        self.snapshot = snapshot or AuthSnapshot()
        self.language = language
        self.sync_budget = SyncRetryBudget()

        self._unmounted = False
        self._consumed = False
        self._task: asyncio.Task | None = None

        self._handlers: dict[ClientAuthEventKind, Handler] = {
            ClientAuthEventKind.MAGIC_LINK: self._on_magic_link,
            ClientAuthEventKind.PASSWORD_RECOVERY: self._on_password_recovery,
            ClientAuthEventKind.EMAIL_CONFIRMATION: self._on_email_confirmation,
            ClientAuthEventKind.OAUTH_ERROR: self._on_oauth_error,
            ClientAuthEventKind.BRIDGING_TOKEN: self._on_bridging_token,
            ClientAuthEventKind.PLAIN_SIGN_IN: self._on_plain_sign_in,
        }
        missing = set(ClientAuthEventKind) - set(self._handlers)
        if missing:
            raise ValueError(f"No handler for auth events: {sorted(k.value for k in missing)}")

    @property
    def active(self) -> bool:
        """False once unmounted; effects are applied only while active."""
        return not self._unmounted

    def mount(self, email_confirmed: bool = False) -> asyncio.Task:
        """Start processing the current URL in the background.

        Must be called from a running event loop.
        """
        self._task = asyncio.create_task(self.process(email_confirmed))
        return self._task

    def unmount(self) -> None:
        """Cancel pending work; later results are ignored."""
        self._unmounted = True
        if self._task and not self._task.done():
            self._task.cancel()

    async def process(self, email_confirmed: bool = False) -> ClientAuthEvent | None:
        """Classify the current URL and dispatch it, at most once.

        Returns:
            The dispatched event, or None if there was nothing to do
        """
        if self._consumed:
            return None
        self._consumed = True

        event = classify(
            self.browser.current_url(),
            session_present=self.snapshot.signed_in,
            email_confirmed=email_confirmed,
        )
        if event is None:
            return None

        logfire.info("Auth redirect classified", kind=event.kind.value)
        await self._handlers[event.kind](event)
        return event

    # Effects are dropped once unmounted

    def _rewrite_url(self) -> None:
        if self.active:
            self.browser.replace_history(strip_auth_artifacts(self.browser.current_url()))

    def _navigate(self, path: str) -> None:
        if self.active:
            self.browser.navigate(path)

    def _flash(self, marker: FlashMarker) -> None:
        if self.active:
            self.browser.set_flash(marker)

    def _show_error(self, message: str, title: str | None = None) -> None:
        if self.active:
            self.browser.show_message(title or error_title(self.language), message, error=True)

    async def _sync(self) -> None:
        if self.snapshot.session is None:
            return

        outcome = await self.sync_client.sync(self.snapshot.session.user, self.sync_budget)
        if not self.active:
            return

        self.sync_budget = outcome.budget
        if outcome.succeeded:
            self.snapshot = self.snapshot.apply(AuthEventType.SYNC_SUCCEEDED, user=outcome.user)
            return

        self.snapshot = self.snapshot.apply(AuthEventType.SYNC_FAILED, error=outcome.error)
        if outcome.should_notify:
            self._show_error(
                sync_failed_message(self.language), title=sync_failed_title(self.language)
            )

    async def _establish_session(self, token: str | None, replace: bool = False) -> bool:
        """Set the managed session from a redirect token.

        An existing session is kept unless replace is set. A redirect without
        a token leaves the snapshot as it is.

        Returns:
            False when the token was rejected or the interpreter was unmounted
        """
        if not token or (self.snapshot.session is not None and not replace):
            return True

        try:
            session: ManagedSession = await self.backend.set_session(token)
        except ManagedAuthError as e:
            logfire.warn("Redirect token rejected", error=str(e))
            self._show_error(
                oauth_error_message(OAuthErrorCode.LOGIN_FAILED.value, self.language)
            )
            self._rewrite_url()
            return False

        if not self.active:
            return False

        self.snapshot = self.snapshot.apply(AuthEventType.SIGNED_IN, session=session)
        return True

    # Handlers

    async def _on_magic_link(self, event: ClientAuthEvent) -> None:
        if not await self._establish_session(event.token):
            return
        self._rewrite_url()
        self._flash(FlashMarker.MAGIC_LINK_SUCCESS)
        await self._sync()
        self._navigate(HOME_PATH)

    async def _on_email_confirmation(self, event: ClientAuthEvent) -> None:
        if not await self._establish_session(event.token):
            return
        self._rewrite_url()
        self._flash(FlashMarker.EMAIL_CONFIRMED)
        await self._sync()
        self._navigate(HOME_PATH)

    async def _on_password_recovery(self, event: ClientAuthEvent) -> None:
        if not await self._establish_session(event.token):
            return
        # No sync until the user has set a new password
        self.snapshot = self.snapshot.apply(AuthEventType.PASSWORD_RECOVERY)
        self._rewrite_url()
        self._navigate(PASSWORD_RESET_PATH)

    async def _on_oauth_error(self, event: ClientAuthEvent) -> None:
        self._show_error(oauth_error_message(event.reason or "", self.language))
        self._rewrite_url()

    async def _on_bridging_token(self, event: ClientAuthEvent) -> None:
        # A bridging token is a fresh login and replaces any current session
        if not await self._establish_session(event.token, replace=True):
            return
        self._rewrite_url()
        await self._sync()
        self._navigate(HOME_PATH)

    async def _on_plain_sign_in(self, event: ClientAuthEvent) -> None:
        await self._sync()
        self._navigate(HOME_PATH)
