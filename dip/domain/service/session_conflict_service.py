"""Session conflict domain service."""

import logfire

from dip.domain.value import (
    ConflictAction,
    ConflictResolution,
    ConflictStatus,
    CookieInstructions,
    SessionConflictState,
)

from .base import Service

CLEAR_PHP_SESSION_MESSAGE = "Eski oturum temizlendi"
REQUIRE_LOGIN_MESSAGE = "Oturum süresi doldu, lütfen tekrar giriş yapın"


class SessionConflictResolver(Service):
    """Decides how to reconcile a legacy and a modern session cookie.

    Pure: the outcome depends only on the observed state and on whether the
    modern session is valid, so repeated calls give the same answer.
    """

    def __init__(self, legacy_cookie_name: str = "PHPSESSID", cookie_path: str = "/") -> None:
        self.legacy_cookie_name = legacy_cookie_name
        self.cookie_path = cookie_path

    def resolve(
        self, state: SessionConflictState, modern_session_valid: bool
    ) -> ConflictResolution:
        """Resolve the observed session state.

        Args:
            state: Cookies observed on the request
            modern_session_valid: Whether the modern session token verified

        Returns:
            Resolution; conflict is only reported when both cookies are present
        """
        if state.status is not ConflictStatus.BOTH_PRESENT:
            return ConflictResolution.none()

        if not modern_session_valid:
            logfire.info("Session conflict with invalid modern session")
            return ConflictResolution(
                conflict=True,
                action=ConflictAction.REQUIRE_LOGIN,
                message=REQUIRE_LOGIN_MESSAGE,
            )

        logfire.info("Session conflict resolved", domain=state.domain)
        return ConflictResolution(
            conflict=True,
            action=ConflictAction.CLEAR_PHP_SESSION,
            message=CLEAR_PHP_SESSION_MESSAGE,
            instructions=CookieInstructions(
                cookie_to_clear=self.legacy_cookie_name,
                domain=state.domain,
                path=self.cookie_path,
            ),
        )
