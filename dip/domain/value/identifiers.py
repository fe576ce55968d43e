"""Strongly typed identifiers for DİP domain entities.

Using NewType for strong typing prevents mixing up local user IDs with
provider subject IDs or managed-auth user IDs.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
