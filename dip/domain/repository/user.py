"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from dip.domain.model.user import User
from dip.domain.value import Email, UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by normalized email.

        Args:
            email: Normalized email

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def upsert_by_email(self, candidate: User) -> User:
        """Atomically create or merge the user for candidate.email.

        Must rely on the unique email constraint rather than read-then-write,
        so concurrent calls for the same new email create exactly one record.
        When a record exists it absorbs the candidate (see User.absorb).

        Args:
            candidate: Record built from the latest login source

        Returns:
            The stored user
        """
        pass
