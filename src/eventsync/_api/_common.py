"""Shared helpers for endpoint modules.

This module centralizes the repeated patterns:
- building the per-call credential headers
- normalizing any failure into one human-readable message

It is internal to eventsync and may change at any time.
"""

from __future__ import annotations

from typing import Any

from eventsync.exceptions import (
    EventSyncApiError,
    EventSyncAuthenticationError,
    EventSyncError,
)
from eventsync.gate import NOT_AUTHENTICATED_MESSAGE

#: Key of the human-readable message in structured error payloads.
ERROR_MESSAGE_KEY = "msg"


def build_auth_headers(header_name: str, credential: str) -> dict[str, str]:
    """Headers installed for a single authenticated call."""
    return {header_name: credential}


def payload_message(payload: Any) -> str | None:
    """Pull the ``msg`` field from a structured error payload, if any."""
    if not isinstance(payload, dict):
        return None
    message = payload.get(ERROR_MESSAGE_KEY)
    if isinstance(message, str) and message.strip():
        return message.strip()
    return None


def normalize_error(exc: EventSyncError, default: str) -> str:
    """Map any eventsync failure to the message shown to the user.

    - no credential: the fixed "not authenticated" message
    - remote rejection: the payload's ``msg`` when present, else *default*
    - transport failure (or anything else): *default*
    """
    if isinstance(exc, EventSyncAuthenticationError) and exc.status_code is None:
        return NOT_AUTHENTICATED_MESSAGE
    if isinstance(exc, EventSyncApiError):
        return payload_message(exc.payload) or default
    return default
