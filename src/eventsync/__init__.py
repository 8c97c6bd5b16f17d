"""eventsync - Async synchronization layer for a remote event collection."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("eventsync")
except PackageNotFoundError:
    __version__ = "0+local"
from eventsync.client import EventSyncClient
from eventsync.config import EventSyncConfig
from eventsync.exceptions import (
    EventSyncApiError,
    EventSyncAuthenticationError,
    EventSyncConfigError,
    EventSyncError,
    EventSyncResponseError,
    EventSyncTransportError,
)
from eventsync.gate import CredentialProvider, SessionGate
from eventsync.models import Event
from eventsync.state import (
    CollectionState,
    EventStore,
    LoggingNotifier,
    Notification,
    NotificationQueue,
    Notifier,
    OperationKind,
    OperationPhase,
    OperationResult,
    OperationTransition,
    Severity,
)

__all__ = [
    "__version__",
    "CollectionState",
    "CredentialProvider",
    "Event",
    "EventStore",
    "EventSyncApiError",
    "EventSyncAuthenticationError",
    "EventSyncClient",
    "EventSyncConfig",
    "EventSyncConfigError",
    "EventSyncError",
    "EventSyncResponseError",
    "EventSyncTransportError",
    "LoggingNotifier",
    "Notification",
    "NotificationQueue",
    "Notifier",
    "OperationKind",
    "OperationPhase",
    "OperationResult",
    "OperationTransition",
    "SessionGate",
    "Severity",
]
