"""Browser-side effects the client needs, behind an interface."""

from abc import ABC, abstractmethod
from enum import Enum


class FlashMarker(str, Enum):
    """One-shot markers shown once on the next page."""

    MAGIC_LINK_SUCCESS = "magic_link_success"
    EMAIL_CONFIRMED = "email_confirmed"


class BrowserPort(ABC):
    """Effects applied to the hosting page."""

    @abstractmethod
    def current_url(self) -> str:
        pass

    @abstractmethod
    def replace_history(self, url: str) -> None:
        """Rewrite the current history entry without navigating."""
        pass

    @abstractmethod
    def navigate(self, path: str) -> None:
        pass

    @abstractmethod
    def show_message(self, title: str, message: str, error: bool = False) -> None:
        pass

    @abstractmethod
    def set_flash(self, marker: FlashMarker) -> None:
        pass

    @abstractmethod
    def expire_cookie(self, name: str, domain: str | None, path: str) -> None:
        pass
