"""High-level async client for the event service."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

import aiohttp

from eventsync._transport import HttpTransport, Transport
from eventsync.config import EventSyncConfig
from eventsync.exceptions import EventSyncError
from eventsync.gate import CredentialProvider, SessionGate
from eventsync.models.event import Event
from eventsync.state.events import OperationResult, OperationTransition
from eventsync.state.notifications import Notifier
from eventsync.state.store import CollectionState, EventStore

_logger = logging.getLogger(__name__)


class EventSyncClient:
    """Async client wiring the transport, session gate and event store.

    Usage::

        async with EventSyncClient(config) as client:
            client.sign_in(token)
            await client.list_events()
            print(client.state.items)
    """

    def __init__(
        self,
        config: EventSyncConfig,
        *,
        gate: CredentialProvider | None = None,
        session: aiohttp.ClientSession | None = None,
        notifier: Notifier | None = None,
        on_transition: Callable[[OperationTransition], None] | None = None,
    ) -> None:
        self._config = config
        self._gate: CredentialProvider = gate if gate is not None else SessionGate(config.token)
        self._external_session = session is not None
        self._http_session = session
        self._notifier = notifier
        self._on_transition = on_transition
        self._transport: Transport | None = None
        self._store: EventStore | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> EventSyncClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        self._store = EventStore(
            self._config,
            self._transport,
            self._gate,
            notifier=self._notifier,
            on_transition=self._on_transition,
        )
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None
        self._store = None

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    @property
    def gate(self) -> CredentialProvider:
        return self._gate

    def sign_in(self, token: str) -> None:
        """Install a token on the default :class:`SessionGate`."""
        self._require_session_gate().sign_in(token)

    def sign_out(self) -> None:
        """Forget the token and discard the local collection."""
        self._require_session_gate().sign_out()
        if self._store is not None:
            self._store.reset()

    def _require_session_gate(self) -> SessionGate:
        if not isinstance(self._gate, SessionGate):
            raise EventSyncError("sign_in/sign_out need a SessionGate; manage custom credential providers directly")
        return self._gate

    # ------------------------------------------------------------------
    # Store access
    # ------------------------------------------------------------------

    def _require_store(self) -> EventStore:
        if self._store is None:
            raise EventSyncError("Client not initialized. Use 'async with EventSyncClient(...) as client:'")
        return self._store

    @property
    def store(self) -> EventStore:
        return self._require_store()

    @property
    def state(self) -> CollectionState:
        return self._require_store().snapshot()

    def acknowledge_error(self) -> None:
        self._require_store().acknowledge_error()

    async def list_events(self) -> OperationResult:
        return await self._require_store().list_events()

    async def create_event(self, fields: Mapping[str, Any]) -> OperationResult:
        return await self._require_store().create_event(fields)

    async def update_event(self, event: Event) -> OperationResult:
        return await self._require_store().update_event(event)

    async def delete_event(self, event_id: str) -> OperationResult:
        return await self._require_store().delete_event(event_id)
