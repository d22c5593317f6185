from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Callable


Clock = Callable[[], datetime]
FullscreenContextPredicate = Callable[[], bool]


class NotificationError(Exception):
    """Raised by a notifier when a reminder could not be delivered or cleared."""


class NotificationStatus(str, Enum):
    AUTHORIZED = "authorized"
    DENIED = "denied"
    NOT_DETERMINED = "not_determined"
    UNKNOWN = "unknown"


class Notifier(ABC):
    @abstractmethod
    def send(self, title: str, body: str, action_label: str) -> None:
        """Deliver a rest reminder offering a single "start break" action."""

    @abstractmethod
    def clear_all(self) -> None:
        """Remove pending and delivered rest reminders."""

    def authorization_status(self) -> NotificationStatus:
        return NotificationStatus.UNKNOWN

    def request_authorization(self) -> None:
        """Ask the OS for permission to post notifications."""


class FullscreenPresenter(ABC):
    @abstractmethod
    def show_prompt(self, on_confirm: Callable[[], None], on_later: Callable[[], None]) -> None:
        """Show the full-screen "time to rest" prompt."""

    @abstractmethod
    def show_break_countdown(self, on_exit: Callable[[], None]) -> None:
        """Show the full-screen break countdown."""

    @abstractmethod
    def hide(self) -> None:
        """Hide whichever overlay is visible."""


class Ticker(ABC):
    @abstractmethod
    def start(self, callback: Callable[[], None]) -> None:
        """Call ``callback`` once per second, replacing any previous schedule."""

    @abstractmethod
    def stop(self) -> None:
        ...

    @property
    @abstractmethod
    def is_running(self) -> bool:
        ...
