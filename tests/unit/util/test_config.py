"""Unit tests for settings and startup configuration checks."""

import pytest

from dip.config import (
    AuthSettings,
    OAuthProviderSettings,
    Settings,
    check_startup_configuration,
    missing_configuration,
)
from dip.util.error import ConfigurationError


class TestSettings:
    def test_development_urls(self):
        settings = Settings(environment="development", host="localhost", port=8000)

        assert settings.api.base_url == "http://localhost:8000"
        assert settings.api.frontend_url == "http://localhost:5173"
        assert settings.auth.google_callback_url == "http://localhost:8000/auth/google/callback"
        assert settings.secure_cookies is False

    def test_production_urls(self):
        settings = Settings(
            environment="production",
            host="partner.dip.tc",
            frontend_host="partner.dip.tc",
        )

        assert settings.auth.linkedin_callback_url == (
            "https://partner.dip.tc/auth/linkedin/callback"
        )
        assert settings.api.frontend_url == "https://partner.dip.tc"
        assert settings.secure_cookies is True

    def test_session_cookie_defaults(self):
        settings = Settings()

        assert settings.session.legacy_cookie_name == "PHPSESSID"
        assert settings.session.cookie_path == "/"


class TestStartupConfiguration:
    def test_complete_configuration_passes(self):
        check_startup_configuration(Settings())

    def test_lists_every_missing_value(self):
        auth = AuthSettings(
            session_jwt_secret="set",
            google=OAuthProviderSettings(client_id="id", client_secret="secret"),
        )
        settings = Settings().model_copy(update={"auth": auth})

        assert missing_configuration(settings) == [
            "AUTH__MANAGED_JWT_SECRET",
            "AUTH__LINKEDIN__CLIENT_ID",
            "AUTH__LINKEDIN__CLIENT_SECRET",
        ]

    def test_missing_secret_fails_fast(self):
        settings = Settings().model_copy(update={"auth": AuthSettings()})

        with pytest.raises(ConfigurationError, match="AUTH__MANAGED_JWT_SECRET"):
            check_startup_configuration(settings)
