"""Managed-auth backend client."""

from abc import ABC, abstractmethod

import httpx
import logfire
from pydantic import Field

from dip.domain.value import ManagedSessionUser
from dip.domain.value.common import ValueObject


class ManagedAuthError(Exception):
    """Managed-auth backend rejected a token or could not be reached."""

    pass


class ManagedSession(ValueObject):
    """An authenticated managed-auth session."""

    access_token: str = Field(repr=False)
    user: ManagedSessionUser


class ManagedAuthBackend(ABC):
    """Managed-auth backend operations used by the client."""

    @abstractmethod
    async def set_session(self, access_token: str) -> ManagedSession:
        """Establish a session from an access token (e.g. a bridging token).

        Raises:
            ManagedAuthError: If the backend does not accept the token
        """
        pass

    @abstractmethod
    async def sign_out(self, access_token: str) -> None:
        """End the managed-auth session for access_token.

        Raises:
            ManagedAuthError: If the backend could not be reached or refused
        """
        pass


class SupabaseAuthBackend(ManagedAuthBackend):
    """Supabase-compatible backend over its GoTrue REST API."""

    def __init__(
        self,
        url: str,
        anon_key: str,
        http_client: httpx.AsyncClient,
    ) -> None:
        """Initialize backend client.

        Args:
            url: Project URL (e.g. https://xyz.supabase.co)
            anon_key: Public anon key sent as apikey header
            http_client: Shared HTTP client
        """
        self.url = url.rstrip("/")
        self.anon_key = anon_key
        self.http_client = http_client

    async def set_session(self, access_token: str) -> ManagedSession:
        with logfire.span("managed_auth.set_session"):
            try:
                response = await self.http_client.get(
                    f"{self.url}/auth/v1/user",
                    headers={
                        "Authorization": f"Bearer {access_token}",
                        "apikey": self.anon_key,
                    },
                )
            except httpx.HTTPError as e:
                logfire.error("Managed-auth request failed", error=str(e))
                raise ManagedAuthError(f"Managed-auth request failed: {e}") from e

            if response.status_code != 200:
                logfire.warn(
                    "Managed-auth rejected token", status_code=response.status_code
                )
                raise ManagedAuthError(
                    f"Managed-auth rejected token: {response.status_code}"
                )

            try:
                user = ManagedSessionUser.model_validate(response.json())
            except ValueError as e:
                raise ManagedAuthError("Invalid managed-auth user payload") from e

            return ManagedSession(access_token=access_token, user=user)

    async def sign_out(self, access_token: str) -> None:
        with logfire.span("managed_auth.sign_out"):
            try:
                response = await self.http_client.post(
                    f"{self.url}/auth/v1/logout",
                    headers={
                        "Authorization": f"Bearer {access_token}",
                        "apikey": self.anon_key,
                    },
                )
            except httpx.HTTPError as e:
                logfire.error("Managed-auth request failed", error=str(e))
                raise ManagedAuthError(f"Managed-auth request failed: {e}") from e

            # An already expired token has nothing left to end
            if not response.is_success and response.status_code != 401:
                raise ManagedAuthError(
                    f"Managed-auth sign-out failed: {response.status_code}"
                )
