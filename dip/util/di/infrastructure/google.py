"""Google infrastructure providers."""

from dishka import Scope, provide

from dip.adapter.google.client import GoogleOAuthClient, RealGoogleOAuthClient
from dip.config import Settings
from dip.util.di.base import ProviderBase
from dip.util.error import ConfigurationError


class GoogleProvider(ProviderBase):
    """Google component base."""

    __mock_component__ = "google"


class ProdGoogleProvider(GoogleProvider):
    """Production Google provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_google_oauth_client(self, settings: Settings) -> GoogleOAuthClient:
        """Provide Google OAuth client.

        Raises:
            ConfigurationError: If Google OAuth credentials are not configured
        """
        credentials = settings.auth.google
        if not credentials.client_id or not credentials.client_secret:
            raise ConfigurationError("Google OAuth client ID and secret must be configured")

        return RealGoogleOAuthClient(
            client_id=credentials.client_id,
            client_secret=credentials.client_secret,
            redirect_uri=settings.auth.google_callback_url,
            timeout=settings.auth.upstream_timeout_seconds,
        )
