"""OAuth infrastructure provider for multi-provider authentication."""

from dishka import Scope, provide

from dip.adapter.google.client import GoogleOAuthClient
from dip.adapter.linkedin.client import LinkedInOAuthClient
from dip.domain.service.auth_service import OAuthClient
from dip.domain.value import AuthProvider
from dip.util.di.base import ProviderBase


class OAuthAggregatorProvider(ProviderBase):
    """Provider that aggregates all OAuth clients into a dictionary."""

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_oauth_clients(
        self,
        google_oauth_client: GoogleOAuthClient,
        linkedin_oauth_client: LinkedInOAuthClient,
    ) -> dict[AuthProvider, OAuthClient]:
        """Provide the provider lookup table used by AuthService.

        Args:
            google_oauth_client: Google OAuth client (specific type)
            linkedin_oauth_client: LinkedIn OAuth client (specific type)

        Returns:
            Dictionary mapping AuthProvider to OAuthClient
        """
        return {
            AuthProvider.GOOGLE: google_oauth_client,
            AuthProvider.LINKEDIN: linkedin_oauth_client,
        }
