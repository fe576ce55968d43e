"""Domain model entities for DİP identity federation."""

from dip.domain.model.user import User

__all__ = [
    "User",
]
