"""Unit tests for IdentitySyncService."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from dip.domain.error import SyncError, ValidationError
from dip.domain.model import User
from dip.domain.service import IdentitySyncService
from dip.domain.value import (
    AuthProvider,
    Email,
    ExternalIdentity,
    ManagedSessionUser,
    UserId,
    UserType,
)
from dip.persistence.repository.inmemory import InMemoryUserRepository


class TestBuildCandidate:
    """Tests for IdentitySyncService.build_candidate()."""

    def test_normalizes_email(self, google_identity):
        """Email should be trimmed and lowercased."""
        service = IdentitySyncService(InMemoryUserRepository())

        candidate = service.build_candidate(google_identity)

        assert candidate.email == Email("ayse.yilmaz@example.com")

    def test_defaults_for_new_record(self, linkedin_identity):
        """New records get user type, Turkish language and verified flag."""
        service = IdentitySyncService(InMemoryUserRepository())

        candidate = service.build_candidate(linkedin_identity)

        assert candidate.active_user_type == UserType.USER
        assert candidate.available_user_types == frozenset({UserType.USER})
        assert candidate.language == "tr"
        assert candidate.is_verified is True
        assert candidate.managed_user_id is None

    def test_managed_user_sets_managed_user_id_and_splits_full_name(self, managed_user):
        service = IdentitySyncService(InMemoryUserRepository())

        candidate = service.build_candidate(managed_user)

        assert candidate.managed_user_id == managed_user.id
        assert candidate.first_name == "Ayşe"
        assert candidate.last_name == "Yılmaz"
        assert candidate.avatar_url == "https://example.com/a.png"

    def test_missing_first_name_uses_placeholder(self):
        """A source without any name gets the placeholder first name."""
        service = IdentitySyncService(InMemoryUserRepository())

        candidate = service.build_candidate(
            ManagedSessionUser(id="m-1", email="noname@example.com")
        )

        assert candidate.first_name == "User"
        assert candidate.last_name == ""

    @pytest.mark.parametrize("email", ["", "   ", "not-an-email"])
    def test_rejects_missing_or_invalid_email(self, email):
        service = IdentitySyncService(InMemoryUserRepository())

        with pytest.raises(ValidationError):
            service.build_candidate(ManagedSessionUser(id="m-1", email=email))


class TestSyncUser:
    """Tests for IdentitySyncService.sync_user()."""

    @pytest.mark.asyncio
    async def test_creates_user_on_first_sync(self, google_identity):
        repo = InMemoryUserRepository()
        service = IdentitySyncService(repo)

        user = await service.sync_user(google_identity)

        assert repo.count() == 1
        assert user.email.root == "ayse.yilmaz@example.com"
        assert user.first_name == "Ayşe"

    @pytest.mark.asyncio
    async def test_sync_is_idempotent(self, managed_user):
        """Syncing twice should leave one identical record."""
        repo = InMemoryUserRepository()
        service = IdentitySyncService(repo)

        first = await service.sync_user(managed_user)
        second = await service.sync_user(managed_user)

        assert repo.count() == 1
        assert second == first
        assert second.updated_at == first.updated_at

    @pytest.mark.asyncio
    async def test_google_then_linkedin_resolve_to_one_user(
        self, google_identity, linkedin_identity
    ):
        """Same email on two providers should map to the same local user."""
        repo = InMemoryUserRepository()
        service = IdentitySyncService(repo)

        via_google = await service.sync_user(google_identity)
        via_linkedin = await service.sync_user(linkedin_identity)

        assert repo.count() == 1
        assert via_linkedin.id == via_google.id
        # Latest non-empty names win; avatar is kept when the new source has none
        assert via_linkedin.first_name == "Ayse"
        assert via_linkedin.avatar_url == google_identity.avatar_url

    @pytest.mark.asyncio
    async def test_managed_user_id_is_set_once(self, google_identity, managed_user):
        repo = InMemoryUserRepository()
        service = IdentitySyncService(repo)

        await service.sync_user(google_identity)
        linked = await service.sync_user(managed_user)
        relinked = await service.sync_user(
            managed_user.model_copy(update={"id": "another-managed-id"})
        )

        assert linked.managed_user_id == managed_user.id
        assert relinked.managed_user_id == managed_user.id

    @pytest.mark.asyncio
    async def test_available_user_types_never_shrink(self, linkedin_identity):
        repo = InMemoryUserRepository()
        partner = User(
            id=UserId(uuid4()),
            email=Email("ayse.yilmaz@example.com"),
            first_name="Ayse",
            available_user_types=frozenset({UserType.USER, UserType.PARTNER}),
            active_user_type=UserType.PARTNER,
        )
        await repo.upsert_by_email(partner)
        service = IdentitySyncService(repo)

        user = await service.sync_user(linkedin_identity)

        assert user.available_user_types == frozenset({UserType.USER, UserType.PARTNER})
        assert user.active_user_type == UserType.PARTNER

    @pytest.mark.asyncio
    async def test_placeholder_name_does_not_overwrite_real_name(self, google_identity):
        repo = InMemoryUserRepository()
        service = IdentitySyncService(repo)
        await service.sync_user(google_identity)

        user = await service.sync_user(
            ManagedSessionUser(id="m-2", email="ayse.yilmaz@example.com")
        )

        assert user.first_name == "Ayşe"

    @pytest.mark.asyncio
    async def test_repository_failure_raises_sync_error(self, google_identity):
        repo = AsyncMock()
        repo.upsert_by_email.side_effect = RuntimeError("connection reset")
        service = IdentitySyncService(repo)

        with pytest.raises(SyncError) as exc_info:
            await service.sync_user(google_identity)

        assert exc_info.value.email == "ayse.yilmaz@example.com"
        assert "connection reset" in exc_info.value.reason

    @pytest.mark.asyncio
    async def test_invalid_email_never_reaches_repository(self):
        repo = AsyncMock()
        service = IdentitySyncService(repo)

        with pytest.raises(ValidationError):
            await service.sync_user(
                ExternalIdentity(provider=AuthProvider.GOOGLE, subject_id="1", email="")
            )

        repo.upsert_by_email.assert_not_called()
