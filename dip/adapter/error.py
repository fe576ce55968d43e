"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External identity provider error."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"{provider}: {message}")


class TokenExchangeError(ProviderError):
    """Provider rejected the authorization code exchange.

    Carries the provider's raw error body for server-side logging only.
    Authorization codes are single-use, so this is never retried.
    """

    def __init__(
        self,
        provider: str,
        status_code: int | None,
        body: str,
        error_code: str | None = None,
    ):
        self.status_code = status_code
        self.body = body
        self.error_code = error_code
        super().__init__(
            provider,
            f"Token exchange failed: status={status_code} error={error_code}",
        )

    @property
    def is_invalid_grant(self) -> bool:
        """Whether the code was already consumed or has expired."""
        return self.error_code == "invalid_grant"


class IdentityFetchError(ProviderError):
    """Provider identity could not be fetched completely."""

    pass


class UpstreamTimeout(ProviderError):
    """Provider did not answer within the request timeout.

    Retryable only by the user re-initiating login.
    """

    pass


class MissingEmailError(IdentityFetchError):
    """Provider identity has no email address to federate on."""

    def __init__(self, provider: str):
        super().__init__(provider, "Identity has no email address")
