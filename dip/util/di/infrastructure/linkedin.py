"""LinkedIn infrastructure providers."""

from dishka import Scope, provide

from dip.adapter.linkedin.client import LinkedInOAuthClient, RealLinkedInOAuthClient
from dip.config import Settings
from dip.util.di.base import ProviderBase
from dip.util.error import ConfigurationError


class LinkedInProvider(ProviderBase):
    """LinkedIn component base."""

    __mock_component__ = "linkedin"


class ProdLinkedInProvider(LinkedInProvider):
    """Production LinkedIn provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_linkedin_oauth_client(self, settings: Settings) -> LinkedInOAuthClient:
        """Provide LinkedIn OAuth client.

        Raises:
            ConfigurationError: If LinkedIn OAuth credentials are not configured
        """
        credentials = settings.auth.linkedin
        if not credentials.client_id or not credentials.client_secret:
            raise ConfigurationError(
                "LinkedIn OAuth client ID and secret must be configured"
            )

        return RealLinkedInOAuthClient(
            client_id=credentials.client_id,
            client_secret=credentials.client_secret,
            redirect_uri=settings.auth.linkedin_callback_url,
            timeout=settings.auth.upstream_timeout_seconds,
        )
