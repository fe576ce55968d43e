"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import case, func, or_, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from dip.domain.model import User
from dip.domain.repository import UserRepository
from dip.domain.value import DEFAULT_FIRST_NAME, Email, UserId
from dip.persistence.mappers import row_to_user, user_to_dict
from dip.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email(self, email: Email) -> Optional[User]:
        """Find a user by normalized email.

        Args:
            email: Email to search for

        Returns:
            User if found, None otherwise
        """
        stmt = select(users_table).where(users_table.c.email == email.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def upsert_by_email(self, candidate: User) -> User:
        """Insert the candidate or merge it into the existing row.

        A single INSERT ... ON CONFLICT (email) DO UPDATE statement, so
        concurrent first logins for one email yield one row. The update
        mirrors User.absorb and only fires when a merged value differs, which
        keeps updated_at stable on repeat syncs.

        Args:
            candidate: Record built from the latest login source

        Returns:
            The stored user
        """
        t = users_table.c
        stmt = pg_insert(users_table).values(**user_to_dict(candidate))
        excluded = stmt.excluded

        merged = {
            "first_name": func.coalesce(
                func.nullif(func.nullif(excluded.first_name, ""), DEFAULT_FIRST_NAME),
                t.first_name,
            ),
            "last_name": func.coalesce(func.nullif(excluded.last_name, ""), t.last_name),
            "avatar_url": func.coalesce(
                func.nullif(excluded.avatar_url, ""), t.avatar_url
            ),
            "managed_user_id": func.coalesce(
                t.managed_user_id, excluded.managed_user_id
            ),
            "available_user_types": case(
                (
                    t.available_user_types.contains(excluded.available_user_types),
                    t.available_user_types,
                ),
                else_=func.array_cat(
                    t.available_user_types, excluded.available_user_types
                ),
            ),
        }

        stmt = stmt.on_conflict_do_update(
            index_elements=[t.email],
            set_={**merged, "updated_at": excluded.updated_at},
            where=or_(
                *(expr.is_distinct_from(getattr(t, name)) for name, expr in merged.items())
            ),
        ).returning(users_table)

        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()

        if row:
            return row_to_user(dict(row))

        # Conflict with nothing to change: the row is returned unchanged
        existing = await self.find_by_email(candidate.email)
        if existing is None:
            raise RuntimeError(f"User vanished during upsert: {candidate.email.root}")
        return existing
