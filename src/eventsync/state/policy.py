"""User-facing messages per operation kind."""

from __future__ import annotations

from eventsync.state.events import OperationKind

_DEFAULT_ERRORS: dict[OperationKind, str] = {
    OperationKind.LIST: "Failed to fetch events",
    OperationKind.CREATE: "Failed to add event",
    OperationKind.UPDATE: "Failed to update event",
    OperationKind.DELETE: "Failed to delete event",
}

# Listing succeeds silently.
_SUCCESS_MESSAGES: dict[OperationKind, str] = {
    OperationKind.CREATE: "Event added successfully!",
    OperationKind.UPDATE: "Event updated successfully!",
    OperationKind.DELETE: "Event deleted successfully!",
}


def default_error(kind: OperationKind) -> str:
    """Fallback message when a failure carries no structured message."""
    return _DEFAULT_ERRORS[kind]


def success_message(kind: OperationKind) -> str | None:
    """Notification text for a successful operation, or ``None`` for none."""
    return _SUCCESS_MESSAGES.get(kind)
