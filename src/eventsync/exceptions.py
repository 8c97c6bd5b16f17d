"""Custom exception hierarchy for eventsync."""

from __future__ import annotations

from typing import Any


class EventSyncError(Exception):
    """Base exception for all eventsync errors."""


class EventSyncConfigError(EventSyncError):
    """Invalid or missing configuration."""


class EventSyncTransportError(EventSyncError):
    """HTTP-level failure (network, timeout, undecodable body)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class EventSyncApiError(EventSyncError):
    """The remote service answered, but reported a failure.

    ``payload`` holds the decoded structured error body when the service
    sent one (typically ``{"msg": "..."}``).
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
        payload: Any = None,
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        self.payload = payload
        super().__init__(message)


class EventSyncAuthenticationError(EventSyncApiError):
    """No credential is available, or the service rejected it."""


class EventSyncResponseError(EventSyncApiError):
    """A successful response did not have the expected shape.

    For example a create that returns no event, or an event without an id.
    """
