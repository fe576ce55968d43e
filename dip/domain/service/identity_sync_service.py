"""Identity sync domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from dip.domain.error import SyncError, ValidationError
from dip.domain.model.user import User
from dip.domain.repository.user import UserRepository
from dip.domain.value import (
    DEFAULT_FIRST_NAME,
    Email,
    ExternalIdentity,
    ManagedSessionUser,
    UserId,
    UserType,
)

from .base import Service

SyncSource = ExternalIdentity | ManagedSessionUser


class IdentitySyncService(Service):
    """Domain service reconciling login sources into one local user per email.

    Google, LinkedIn and managed-auth sessions for the same person all land on
    the same record because the repository upserts on normalized email.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize identity sync service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    def build_candidate(self, source: SyncSource) -> User:
        """Build a fresh local record from a login source.

        Args:
            source: External identity or managed-auth session user

        Returns:
            Candidate record (not yet persisted)

        Raises:
            ValidationError: If the source email is missing or malformed
        """
        if not source.email or not source.email.strip():
            raise ValidationError("Email is required")

        try:
            email = Email(source.email)
        except PydanticValidationError:
            raise ValidationError(f"Invalid email: {source.email!r}")

        managed_user_id = (
            source.id if isinstance(source, ManagedSessionUser) else None
        )
        now = datetime.now(timezone.utc)

        return User(
            id=UserId(uuid4()),
            email=email,
            first_name=source.first_name or DEFAULT_FIRST_NAME,
            last_name=source.last_name,
            avatar_url=source.avatar_url,
            active_user_type=UserType.USER,
            available_user_types=frozenset({UserType.USER}),
            managed_user_id=managed_user_id,
            is_verified=True,
            language="tr",
            created_at=now,
            updated_at=now,
        )

    async def sync_user(self, source: SyncSource) -> User:
        """Create or update the local user for a login source.

        Idempotent: syncing the same source twice leaves one record whose
        fields (updated_at included) match the first sync.

        Args:
            source: External identity or managed-auth session user

        Returns:
            The stored local user

        Raises:
            ValidationError: If the source email is missing or malformed
            SyncError: If the upsert fails
        """
        candidate = self.build_candidate(source)

        with logfire.span("identity_sync_service.sync_user", email=candidate.email.root):
            try:
                user = await self.user_repository.upsert_by_email(candidate)
            except Exception as e:
                logfire.error(
                    "User sync failed", email=candidate.email.root, error=str(e)
                )
                raise SyncError(candidate.email.root, str(e)) from e

            if user.id == candidate.id:
                logfire.info("User created", user_id=str(user.id))
            else:
                logfire.info("User synced", user_id=str(user.id))
            return user
