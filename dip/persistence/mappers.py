"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from dip.domain.model import User
from dip.domain.value import Email, UserId, UserType


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(UUID(row["id"]) if isinstance(row["id"], str) else row["id"]),
        email=Email(row["email"]),
        first_name=row["first_name"],
        last_name=row["last_name"],
        avatar_url=row.get("avatar_url"),
        active_user_type=UserType(row["active_user_type"]),
        # Stored as an array; duplicates collapse here
        available_user_types=frozenset(
            UserType(t) for t in row["available_user_types"]
        ),
        managed_user_id=row.get("managed_user_id"),
        is_verified=row["is_verified"],
        language=row["language"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "id": user.id,
        "email": user.email.root,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "avatar_url": user.avatar_url,
        "active_user_type": user.active_user_type.value,
        "available_user_types": sorted(t.value for t in user.available_user_types),
        "managed_user_id": user.managed_user_id,
        "is_verified": user.is_verified,
        "language": user.language,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }
