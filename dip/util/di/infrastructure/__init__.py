"""Infrastructure providers."""

# Import bases
from .google import GoogleProvider
from .linkedin import LinkedInProvider
from .oauth import OAuthAggregatorProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .google import ProdGoogleProvider  # noqa: F401
from .linkedin import ProdLinkedInProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "GoogleProvider",
    "LinkedInProvider",
    "OAuthAggregatorProvider",
    "PersistenceProvider",
    "ProdGoogleProvider",
    "ProdLinkedInProvider",
    "ProdPersistenceProvider",
]
