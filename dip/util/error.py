"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Required configuration (credentials, secrets) is missing.

    Raised at startup; never recoverable per request.
    """

    pass
