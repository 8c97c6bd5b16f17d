"""In-memory event collection kept in sync with the remote service.

This is the only component allowed to mutate the local collection.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from eventsync._api import events as _events_api
from eventsync._api._common import normalize_error
from eventsync._transport import Transport
from eventsync.config import EventSyncConfig
from eventsync.exceptions import EventSyncError
from eventsync.gate import CredentialProvider, require_credential
from eventsync.models.event import Event
from eventsync.state.events import OperationKind, OperationPhase, OperationResult, OperationTransition
from eventsync.state.notifications import LoggingNotifier, Notification, Notifier, Severity
from eventsync.state.policy import default_error, success_message

_logger = logging.getLogger(__name__)


class CollectionState(BaseModel):
    """Read-only view of the store handed to callers."""

    model_config = ConfigDict(frozen=True)

    items: tuple[Event, ...] = ()
    busy: bool = False
    last_error: str | None = None


class EventStore:
    """Event collection synchronized with the remote service.

    Every operation follows the same lifecycle:

    1. *requested*: the store becomes busy and ``last_error`` is cleared.
    2. *settled ok*: the operation's mutation is applied to ``items``.
    3. *settled error*: ``last_error`` holds a normalized message and
       ``items`` is left untouched.

    Operations never raise :class:`EventSyncError`; failures come back as an
    :class:`OperationResult` in the ``SETTLED_ERROR`` phase. Several
    operations may be in flight; each applies its mutation in settlement
    order. ``busy`` stays true until the last outstanding one settles.
    """

    def __init__(
        self,
        config: EventSyncConfig,
        transport: Transport,
        gate: CredentialProvider,
        *,
        notifier: Notifier | None = None,
        logger: logging.Logger | None = None,
        on_transition: Callable[[OperationTransition], None] | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._gate = gate
        self._notifier: Notifier = notifier if notifier is not None else LoggingNotifier()
        self._logger = logger or _logger
        self._on_transition = on_transition

        self._items: tuple[Event, ...] = ()
        self._last_error: str | None = None
        self._in_flight = 0
        # Bumped by reset(); settlements from an older generation are discarded.
        self._generation = 0
        self._sequence = itertools.count(1)

    # ------------------------------------------------------------------
    # Read model
    # ------------------------------------------------------------------

    @property
    def items(self) -> tuple[Event, ...]:
        return self._items

    @property
    def busy(self) -> bool:
        return self._in_flight > 0

    @property
    def last_error(self) -> str | None:
        return self._last_error

    def snapshot(self) -> CollectionState:
        return CollectionState(items=self._items, busy=self.busy, last_error=self._last_error)

    # ------------------------------------------------------------------
    # Caller actions
    # ------------------------------------------------------------------

    def acknowledge_error(self) -> None:
        """Clear ``last_error`` once the caller has shown it."""
        self._last_error = None

    def reset(self) -> None:
        """Return to the initial empty state (e.g. on sign-out).

        Operations still in flight settle normally for their callers but no
        longer touch this store.
        """
        self._items = ()
        self._last_error = None
        self._in_flight = 0
        self._generation += 1

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def list_events(self) -> OperationResult:
        """Refresh the whole collection from the service."""
        return await self._run(
            OperationKind.LIST,
            lambda credential: _events_api.fetch_events(self._config, self._transport, credential),
            self._apply_list,
        )

    async def create_event(self, fields: Mapping[str, Any]) -> OperationResult:
        """Create an event; the server-confirmed record is appended."""
        return await self._run(
            OperationKind.CREATE,
            lambda credential: _events_api.create_event(self._config, self._transport, credential, fields),
            self._apply_create,
        )

    async def update_event(self, event: Event) -> OperationResult:
        """Send *event*'s full field set and replace the local entry in place."""
        return await self._run(
            OperationKind.UPDATE,
            lambda credential: _events_api.update_event(self._config, self._transport, credential, event),
            self._apply_update,
        )

    async def delete_event(self, event_id: str) -> OperationResult:
        """Delete an event remotely and drop every local entry with its id."""
        return await self._run(
            OperationKind.DELETE,
            lambda credential: _events_api.delete_event(self._config, self._transport, credential, event_id),
            self._apply_delete,
        )

    # ------------------------------------------------------------------
    # Mutations (applied at settlement, synchronously)
    # ------------------------------------------------------------------

    def _apply_list(self, fetched: list[Event]) -> None:
        ids = [event.id for event in fetched]
        if len(set(ids)) != len(ids):
            self._logger.warning("Fetched event list contains duplicate ids")
        self._items = tuple(fetched)

    def _apply_create(self, created: Event) -> None:
        for index, existing in enumerate(self._items):
            if existing.id == created.id:
                # Already present, e.g. a concurrent list settled first.
                self._logger.debug("Created event %s already present locally; replacing", created.id)
                self._items = (*self._items[:index], created, *self._items[index + 1 :])
                return
        self._items = (*self._items, created)

    def _apply_update(self, updated: Event) -> None:
        for index, existing in enumerate(self._items):
            if existing.id == updated.id:
                self._items = (*self._items[:index], updated, *self._items[index + 1 :])
                return
        self._logger.warning("Updated event %s has no local entry; collection left unchanged", updated.id)

    def _apply_delete(self, event_id: str) -> None:
        remaining = tuple(event for event in self._items if event.id != event_id)
        if len(remaining) != len(self._items):
            self._items = remaining

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def _run(
        self,
        kind: OperationKind,
        call: Callable[[str], Awaitable[Any]],
        apply: Callable[[Any], None],
    ) -> OperationResult:
        operation_id = next(self._sequence)
        generation = self._generation
        self._begin(operation_id, kind)

        settled = False
        try:
            try:
                credential = require_credential(self._gate)
                value = await call(credential)
            except EventSyncError as exc:
                message = normalize_error(exc, default_error(kind))
                self._logger.debug("%s #%d failed: %s", kind, operation_id, exc, exc_info=True)
                settled = True
                self._settle(operation_id, kind, generation, OperationPhase.SETTLED_ERROR, message=message)
                return OperationResult.failure(kind, message)

            settled = True
            self._settle(operation_id, kind, generation, OperationPhase.SETTLED_OK, apply=lambda: apply(value))
            return OperationResult.success(kind, value)
        finally:
            # Cancelled, or an unexpected error escaped the transport.
            if not settled:
                self._logger.debug("%s #%d abandoned before settling", kind, operation_id)
                self._release(generation)

    def _begin(self, operation_id: int, kind: OperationKind) -> None:
        self._in_flight += 1
        self._last_error = None
        self._emit(
            OperationTransition(
                operation_id=operation_id,
                kind=kind,
                phase=OperationPhase.REQUESTED,
                in_flight=self._in_flight,
            )
        )

    def _settle(
        self,
        operation_id: int,
        kind: OperationKind,
        generation: int,
        phase: OperationPhase,
        *,
        message: str | None = None,
        apply: Callable[[], None] | None = None,
    ) -> None:
        if not self._release(generation):
            self._logger.debug("%s #%d settled after reset; discarding", kind, operation_id)
        elif phase is OperationPhase.SETTLED_OK:
            if apply is not None:
                apply()
        else:
            self._last_error = message

        self._emit(
            OperationTransition(
                operation_id=operation_id,
                kind=kind,
                phase=phase,
                message=message,
                in_flight=self._in_flight,
            )
        )

        if phase is OperationPhase.SETTLED_ERROR:
            self._notify(Severity.ERROR, message or default_error(kind))
        else:
            text = success_message(kind)
            if text is not None:
                self._notify(Severity.SUCCESS, text)

    def _release(self, generation: int) -> bool:
        """Free the in-flight slot taken by an operation of *generation*."""
        if generation != self._generation:
            return False
        self._in_flight = max(0, self._in_flight - 1)
        return True

    def _emit(self, transition: OperationTransition) -> None:
        self._logger.debug(
            "%s #%d -> %s (in flight: %d)",
            transition.kind,
            transition.operation_id,
            transition.phase,
            transition.in_flight,
        )
        if self._on_transition is None:
            return
        try:
            self._on_transition(transition)
        except Exception:
            self._logger.warning("on_transition callback failed", exc_info=True)

    def _notify(self, severity: Severity, message: str) -> None:
        try:
            self._notifier.notify(Notification(severity=severity, message=message))
        except Exception:
            self._logger.warning("Notifier failed to deliver %s message", severity, exc_info=True)
