"""Notification channel for user-facing messages."""

from __future__ import annotations

import logging
from collections import deque
from enum import StrEnum
from typing import Protocol

from pydantic import BaseModel, ConfigDict

_logger = logging.getLogger(__name__)


class Severity(StrEnum):
    ERROR = "error"
    SUCCESS = "success"


class Notification(BaseModel):
    model_config = ConfigDict(frozen=True)

    severity: Severity
    message: str


class Notifier(Protocol):
    """Fire-and-forget "show message" sink."""

    def notify(self, notification: Notification) -> None:
        ...


class LoggingNotifier:
    """Default notifier: writes notifications to the ``logging`` tree."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or _logger

    def notify(self, notification: Notification) -> None:
        level = logging.ERROR if notification.severity is Severity.ERROR else logging.INFO
        self._logger.log(level, "%s", notification.message)


class NotificationQueue:
    """Buffers notifications so a UI layer can drain them at its own pace.

    The queue is bounded; when full the oldest notification is dropped.
    """

    def __init__(self, maxlen: int = 100) -> None:
        self._pending: deque[Notification] = deque(maxlen=maxlen)

    def notify(self, notification: Notification) -> None:
        self._pending.append(notification)

    def __len__(self) -> int:
        return len(self._pending)

    def drain(self) -> list[Notification]:
        """Return and forget every buffered notification, oldest first."""
        drained = list(self._pending)
        self._pending.clear()
        return drained
