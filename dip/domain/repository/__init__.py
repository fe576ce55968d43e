"""Repository interfaces for DİP domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from dip.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
]
