"""Client side of identity sync with a bounded retry budget."""

from typing import Any

import httpx
import logfire
from pydantic import model_validator

from dip.domain.value import ManagedSessionUser
from dip.domain.value.common import ValueObject

SYNC_PATH = "/api/auth/sync-supabase-user"
DEFAULT_RETRY_CAP = 2


class SyncRetryBudget(ValueObject):
    """How many sync attempts have failed, and how many are allowed.

    Passed through and returned by each sync call instead of living in
    ambient browser storage.
    """

    failures: int = 0
    cap: int = DEFAULT_RETRY_CAP

    @model_validator(mode="after")
    def check_bounds(self) -> "SyncRetryBudget":
        if self.cap < 1 or self.failures < 0:
            raise ValueError("Retry cap must be positive and failures non-negative")
        return self

    @property
    def exhausted(self) -> bool:
        return self.failures >= self.cap

    def record_failure(self) -> "SyncRetryBudget":
        return self.model_copy(update={"failures": self.failures + 1})

    def reset(self) -> "SyncRetryBudget":
        return self.model_copy(update={"failures": 0})


class SyncOutcome(ValueObject):
    """Result of one sync call."""

    user: dict[str, Any] | None = None
    budget: SyncRetryBudget
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.user is not None

    @property
    def should_notify(self) -> bool:
        """Whether the connectivity message must be shown.

        Only the failure that reaches the cap notifies; later failures stay
        silent until a success resets the budget.
        """
        return not self.succeeded and self.budget.failures == self.budget.cap


class SyncClient:
    """Calls the sync endpoint, retrying silently until the budget runs out."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        """Initialize sync client.

        Args:
            http_client: HTTP client whose base_url points at the API and
                which carries the browser cookies
        """
        self.http_client = http_client

    async def sync(
        self,
        user: ManagedSessionUser,
        budget: SyncRetryBudget | None = None,
    ) -> SyncOutcome:
        """Sync the managed-auth user into the local record.

        Every call makes at least one attempt. Further attempts are made while
        the budget has room; an already exhausted budget gets exactly one.

        Args:
            user: Session user from the managed-auth backend
            budget: Retry budget carried over from earlier calls

        Returns:
            Outcome with the local user on success and the updated budget
        """
        budget = budget or SyncRetryBudget()
        payload = {
            "supabaseUser": {
                "id": user.id,
                "email": user.email,
                "user_metadata": user.user_metadata,
                "app_metadata": user.app_metadata,
            }
        }

        while True:
            try:
                response = await self.http_client.post(SYNC_PATH, json=payload)
                body = response.json()
                if not isinstance(body, dict):
                    body = {}
                succeeded = body.get("success") and isinstance(body.get("user"), dict)
                if response.is_success and succeeded:
                    logfire.info("User synced with backend", managed_user_id=user.id)
                    return SyncOutcome(user=body["user"], budget=budget.reset())
                error = body.get("error") or f"HTTP {response.status_code}"
            except (httpx.HTTPError, ValueError) as e:
                error = str(e)

            budget = budget.record_failure()
            logfire.warn(
                "User sync attempt failed",
                managed_user_id=user.id,
                failures=budget.failures,
                error=error,
            )
            if budget.exhausted:
                return SyncOutcome(budget=budget, error=error)
