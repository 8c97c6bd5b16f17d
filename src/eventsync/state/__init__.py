"""State/store layer.

This package is the single source of truth for the local event collection.
Every remote operation is funnelled through :class:`EventStore`, which is
the only component allowed to mutate the collection.
"""

from eventsync.state.events import OperationKind, OperationPhase, OperationResult, OperationTransition
from eventsync.state.notifications import (
    LoggingNotifier,
    Notification,
    NotificationQueue,
    Notifier,
    Severity,
)
from eventsync.state.store import CollectionState, EventStore

__all__ = [
    "CollectionState",
    "EventStore",
    "LoggingNotifier",
    "Notification",
    "NotificationQueue",
    "Notifier",
    "OperationKind",
    "OperationPhase",
    "OperationResult",
    "OperationTransition",
    "Severity",
]
