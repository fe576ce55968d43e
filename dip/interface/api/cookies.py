"""Cookie helpers shared by the auth routes.

All cookies are scoped to the configured shared parent domain so that the
legacy system and this API see the same values.
"""

from fastapi import Response

from dip.config import Settings


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """Set the modern session cookie."""
    response.set_cookie(
        key=settings.session.cookie_name,
        value=token,
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
        domain=settings.session.cookie_domain,
        path=settings.session.cookie_path,
        max_age=settings.auth.session_expiry_days * 24 * 60 * 60,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    """Expire the modern session cookie. Safe to call when none is set."""
    response.delete_cookie(
        key=settings.session.cookie_name,
        domain=settings.session.cookie_domain,
        path=settings.session.cookie_path,
        secure=settings.secure_cookies,
        httponly=True,
        samesite="lax",
    )


def set_state_cookie(response: Response, state: str, settings: Settings) -> None:
    """Bind an OAuth state value to this browser for the callback check."""
    response.set_cookie(
        key=settings.session.state_cookie_name,
        value=state,
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
        path="/auth",
        max_age=settings.session.state_max_age_seconds,
    )


def clear_state_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.session.state_cookie_name,
        path="/auth",
        secure=settings.secure_cookies,
        httponly=True,
        samesite="lax",
    )
