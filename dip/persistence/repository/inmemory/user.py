"""In-memory user repository for testing."""

from typing import Optional

from dip.domain.model.user import User
from dip.domain.repository.user import UserRepository
from dip.domain.value import Email, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    Keyed by normalized email. Upserts never await between read and write, so
    they are atomic under asyncio.
    """

    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        for user in self._users.values():
            if user.id == user_id:
                return user
        return None

    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by normalized email."""
        return self._users.get(email.root)

    async def upsert_by_email(self, candidate: User) -> User:
        """Insert the candidate or let the stored record absorb it."""
        key = candidate.email.root
        existing = self._users.get(key)
        user = existing.absorb(candidate) if existing else candidate
        self._users[key] = user
        return user

    def count(self) -> int:
        """Number of stored users."""
        return len(self._users)
