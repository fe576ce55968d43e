"""Unit tests for ResolveSessionConflictUseCase."""

from unittest.mock import MagicMock

from dishka import AsyncContainer
import pytest

from dip.application.usecase.auth import (
    ResolveSessionConflictRequest,
    ResolveSessionConflictUseCase,
)
from dip.domain.service import SessionConflictResolver, SessionService
from dip.domain.value import ConflictAction
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestResolveSessionConflictUseCase:
    @pytest.mark.asyncio
    async def test_valid_modern_session_clears_legacy(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(ResolveSessionConflictUseCase)
        session_service = await unit_env.get(SessionService)
        token = session_service.create_token("u-1", "a@example.com")

        resolution = await use_case.execute(
            ResolveSessionConflictRequest(
                legacy_cookie_present=True, modern_token=token, domain=".dip.tc"
            )
        )

        assert resolution.action is ConflictAction.CLEAR_PHP_SESSION
        assert resolution.instructions.domain == ".dip.tc"

    @pytest.mark.asyncio
    async def test_invalid_modern_session_requires_login(self, unit_env: AsyncContainer):
        use_case = await unit_env.get(ResolveSessionConflictUseCase)

        resolution = await use_case.execute(
            ResolveSessionConflictRequest(legacy_cookie_present=True, modern_token="expired")
        )

        assert resolution.action is ConflictAction.REQUIRE_LOGIN

    @pytest.mark.asyncio
    async def test_resolver_failure_fails_open(self):
        resolver = MagicMock(spec=SessionConflictResolver)
        resolver.resolve.side_effect = RuntimeError("boom")
        session_service = MagicMock(spec=SessionService)
        session_service.is_valid.return_value = True
        use_case = ResolveSessionConflictUseCase(resolver, session_service)

        resolution = await use_case.execute(
            ResolveSessionConflictRequest(legacy_cookie_present=True, modern_token="t")
        )

        assert resolution.conflict is False
