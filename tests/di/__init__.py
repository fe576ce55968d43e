"""Mock providers for testing."""

from .google import MockGoogleProvider
from .linkedin import MockLinkedInProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockGoogleProvider",
    "MockLinkedInProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
