"""LinkedIn OAuth adapter."""

from .client import (
    LinkedInOAuthClient,
    MockLinkedInOAuthClient,
    RealLinkedInOAuthClient,
)

__all__ = ["LinkedInOAuthClient", "RealLinkedInOAuthClient", "MockLinkedInOAuthClient"]
