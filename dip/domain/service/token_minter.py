"""Bridging token domain service."""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import logfire

from dip.config import AuthSettings
from dip.domain.error import SigningError
from dip.domain.value import BridgingToken, ExternalIdentity
from dip.util.jwt import encode_token

from .base import Service

BRIDGING_TOKEN_LIFETIME = timedelta(hours=24)
MANAGED_AUDIENCE = "authenticated"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenMinter(Service):
    """Mints bridging tokens accepted by the managed-auth backend.

    The token lets an OAuth-authenticated user be treated by the backend as if
    they had signed in with it directly. Subjects are namespaced by provider,
    so the same person on two providers yields two subjects; reconciliation to
    one local user happens by email during sync.
    """

    def __init__(
        self,
        auth_settings: AuthSettings,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize token minter.

        Args:
            auth_settings: Authentication settings holding the shared secret
            clock: Source of the current time
        """
        self.auth_settings = auth_settings
        self.clock = clock

    def mint(self, identity: ExternalIdentity) -> BridgingToken:
        """Build and sign the bridging claim set for an identity.

        Deterministic for a given identity and clock.

        Args:
            identity: Verified external identity

        Returns:
            Signed bridging token valid for 24 hours

        Raises:
            SigningError: If the shared secret is unavailable
        """
        secret = self.auth_settings.managed_jwt_secret
        if not secret:
            raise SigningError("Managed-auth JWT secret is not configured")

        issued_at = self.clock().replace(microsecond=0)
        expires_at = issued_at + BRIDGING_TOKEN_LIFETIME
        subject = identity.bridging_subject
        full_name = f"{identity.first_name} {identity.last_name}".strip()

        metadata = {
            "app_metadata": {
                "provider": identity.provider.value,
                "providers": [identity.provider.value],
            },
            "user_metadata": {
                "first_name": identity.first_name,
                "last_name": identity.last_name,
                "full_name": full_name,
                "avatar_url": identity.avatar_url,
                "provider_id": identity.subject_id,
                "email": identity.email,
            },
        }

        claims = {
            "aud": MANAGED_AUDIENCE,
            "role": "authenticated",
            "sub": subject,
            "email": identity.email,
            "phone": "",
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
            **metadata,
        }

        token = encode_token(claims, secret, self.auth_settings.jwt_algorithm)

        logfire.info(
            "Bridging token minted",
            provider=identity.provider.value,
            subject=subject,
        )

        return BridgingToken(
            subject=subject,
            email=identity.email,
            issued_at=issued_at,
            expires_at=expires_at,
            metadata=metadata,
            token=token,
        )
