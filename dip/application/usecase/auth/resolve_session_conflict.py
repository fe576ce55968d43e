"""Resolve session conflict use case."""

import logfire
from pydantic import BaseModel

from dip.application.usecase.base import BaseUseCase
from dip.domain.error import SessionConflictError
from dip.domain.service import SessionConflictResolver, SessionService
from dip.domain.value import ConflictResolution, SessionConflictState


class ResolveSessionConflictRequest(BaseModel):
    """Session cookies observed on the request."""

    legacy_cookie_present: bool
    modern_token: str | None = None
    domain: str | None = None


class ResolveSessionConflictUseCase(BaseUseCase):
    """Use case for reconciling a legacy and a modern session.

    Fails open: any error while resolving yields "no conflict" so a broken
    resolver never blocks a page load.
    """

    def __init__(
        self,
        resolver: SessionConflictResolver,
        session_service: SessionService,
    ) -> None:
        self.resolver = resolver
        self.session_service = session_service

    async def execute(self, request: ResolveSessionConflictRequest) -> ConflictResolution:
        try:
            return self._resolve(request)
        except Exception as e:
            error = SessionConflictError(str(e))
            logfire.error("Session conflict resolution failed", error=str(error))
            return ConflictResolution.none()

    def _resolve(self, request: ResolveSessionConflictRequest) -> ConflictResolution:
        state = SessionConflictState(
            legacy_cookie_present=request.legacy_cookie_present,
            modern_cookie_present=bool(request.modern_token),
            domain=request.domain,
        )
        modern_valid = self.session_service.is_valid(request.modern_token)
        return self.resolver.resolve(state, modern_valid)
