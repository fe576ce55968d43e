"""OAuth login routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from dip.application.usecase.auth import (
    CompleteOAuthLoginRequest,
    CompleteOAuthLoginUseCase,
    StartOAuthLoginRequest,
    StartOAuthLoginUseCase,
)
from dip.config import Settings
from dip.domain.service import UnsupportedProviderError
from dip.domain.value import AuthProvider
from dip.interface.api.cookies import clear_state_cookie, set_state_cookie

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


@router.get("/{provider}")
async def start_login(
    provider: AuthProvider,
    start_use_case: FromDishka[StartOAuthLoginUseCase],
    settings: FromDishka[Settings],
) -> RedirectResponse:
    """Redirect the browser to the provider's consent screen.

    Args:
        provider: OAuth provider (google or linkedin)
        start_use_case: Start OAuth login use case from DI
        settings: Application settings from DI

    Returns:
        HTTP 302 redirect to the provider with the state cookie set

    Example:
        GET /auth/google

        Redirects to: https://accounts.google.com/o/oauth2/v2/auth?...
        Sets cookie: dip_oauth_state
    """
    try:
        result = await start_use_case.execute(StartOAuthLoginRequest(provider=provider))
    except UnsupportedProviderError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unsupported provider: {provider.value}",
        )

    logger.info(f"Starting {provider.value} login")

    response = RedirectResponse(
        url=result.authorization_url, status_code=status.HTTP_302_FOUND
    )
    set_state_cookie(response, result.state, settings)
    return response


@router.get("/{provider}/callback")
async def oauth_callback(
    provider: AuthProvider,
    request: Request,
    complete_use_case: FromDishka[CompleteOAuthLoginUseCase],
    settings: FromDishka[Settings],
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
) -> RedirectResponse:
    """Handle the provider callback and redirect to the frontend.

    Every outcome is a 302 to {frontend_url}/auth with either ?jwt=<token>
    or ?error=<code>. Upstream error detail is never forwarded.

    Args:
        provider: OAuth provider that issued the callback
        request: Incoming request (for the state cookie)
        complete_use_case: Complete OAuth login use case from DI
        settings: Application settings from DI
        code: Authorization code from the provider
        state: State echoed back by the provider
        error: Provider-reported error (e.g. access_denied)

    Returns:
        HTTP 302 redirect to the frontend auth page
    """
    logger.info(f"OAuth callback received: provider={provider.value}")

    result = await complete_use_case.execute(
        CompleteOAuthLoginRequest(
            provider=provider,
            code=code,
            state=state,
            error=error,
            expected_state=request.cookies.get(settings.session.state_cookie_name),
        )
    )

    if result.succeeded:
        logger.info(f"{provider.value} login succeeded, redirecting to frontend")
    else:
        logger.warning(f"{provider.value} login failed: {result.error_code.value}")

    response = RedirectResponse(url=result.redirect_url, status_code=status.HTTP_302_FOUND)
    clear_state_cookie(response, settings)
    return response
