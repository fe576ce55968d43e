"""PostgreSQL repository implementations."""

from dip.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
]
