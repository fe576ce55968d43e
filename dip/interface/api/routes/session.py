"""Session routes: user sync, session conflict resolution, logout."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from dip.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
    ResolveSessionConflictRequest,
    ResolveSessionConflictUseCase,
    SyncUserRequest,
    SyncUserUseCase,
    UserInfo,
)
from dip.config import Settings
from dip.domain.error import NotFoundError, SyncError, ValidationError
from dip.domain.value import ConflictResolution
from dip.interface.api.cookies import clear_session_cookie, set_session_cookie
from dip.util.jwt import JWTError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["session"], route_class=DishkaRoute)


class SyncUserResult(BaseModel):
    """Sync endpoint response."""

    success: bool
    user: UserInfo


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool
    message: str


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "error": message}
    )


@router.post("/auth/sync-supabase-user", response_model=SyncUserResult)
async def sync_supabase_user(
    request: Request,
    sync_use_case: FromDishka[SyncUserUseCase],
    settings: FromDishka[Settings],
):
    """Create or update the local user for a managed-auth session.

    Sets the modern session cookie on success.

    Example:
        POST /api/auth/sync-supabase-user
        {"supabaseUser": {"id": "...", "email": "...", "user_metadata": {...}}}
    """
    try:
        body = await request.json()
        sync_request = SyncUserRequest.model_validate(body)
    except (ValueError, PydanticValidationError):
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid Supabase user data")

    try:
        result = await sync_use_case.execute(sync_request)
    except ValidationError as e:
        logger.warning(f"Rejected user sync: {e}")
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid Supabase user data")
    except SyncError as e:
        logger.error(f"User sync failed: {e}")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to sync user")

    response = JSONResponse(
        content=SyncUserResult(success=True, user=result.user).model_dump(
            mode="json", by_alias=True
        )
    )
    set_session_cookie(response, result.session_token, settings)
    return response


@router.post(
    "/auth/resolve-session-conflict",
    response_model=ConflictResolution,
    response_model_exclude_none=True,
)
async def resolve_session_conflict(
    request: Request,
    resolve_use_case: FromDishka[ResolveSessionConflictUseCase],
    settings: FromDishka[Settings],
) -> ConflictResolution:
    """Report whether a legacy and a modern session collide, and what to do.

    Never fails: resolution errors are reported as no conflict.

    Example response:
        {
            "conflict": true,
            "action": "clear_php_session",
            "message": "...",
            "instructions": {"cookie_to_clear": "PHPSESSID", "domain": ".dip.tc", "path": "/"}
        }
    """
    return await resolve_use_case.execute(
        ResolveSessionConflictRequest(
            legacy_cookie_present=settings.session.legacy_cookie_name in request.cookies,
            modern_token=request.cookies.get(settings.session.cookie_name),
            domain=settings.session.cookie_domain,
        )
    )


@router.post("/auth/logout", response_model=LogoutResponse)
async def logout(
    response: Response,
    settings: FromDishka[Settings],
) -> LogoutResponse:
    """Clear the modern session cookie. Idempotent."""
    clear_session_cookie(response, settings)
    return LogoutResponse(success=True, message="Successfully logged out")


@router.get("/user", response_model=UserInfo)
async def get_current_user(
    request: Request,
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    settings: FromDishka[Settings],
) -> UserInfo:
    """Return the local user behind the modern session cookie.

    Raises:
        HTTPException: 401 if the cookie is absent, invalid or orphaned
    """
    token = request.cookies.get(settings.session.cookie_name)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated"
        )

    try:
        return await get_current_user_use_case.execute(GetCurrentUserRequest(token=token))
    except (JWTError, NotFoundError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated"
        )
