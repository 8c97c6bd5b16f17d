from __future__ import annotations

# pylint: disable=redefined-outer-name

from collections.abc import Mapping
from dataclasses import dataclass, field
from itertools import count
from typing import Any

import pytest

from eventsync.client import EventSyncClient
from eventsync.config import EventSyncConfig
from eventsync.exceptions import EventSyncApiError, EventSyncError
from eventsync.models.event import Event
from eventsync.state.notifications import NotificationQueue, Severity


@dataclass
class FakeEventService:
    """Minimal stateful event service keyed by token."""

    valid_token: str = "tok-123"
    events: dict[str, dict[str, Any]] = field(default_factory=dict)
    calls: dict[str, int] = field(default_factory=dict)
    _ids: Any = field(default_factory=lambda: count(1))

    def _record_call(self, key: str) -> None:
        self.calls[key] = self.calls.get(key, 0) + 1

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
        json_body: Mapping[str, Any] | None = None,
    ) -> Any:
        self._record_call(method)
        if (headers or {}).get("x-auth-token") != self.valid_token:
            raise EventSyncApiError("HTTP 401", status_code=401, payload={"msg": "Token is not valid"})

        parts = path.strip("/").split("/")
        if method == "GET":
            return [{"_id": event_id, **fields} for event_id, fields in self.events.items()]
        if method == "POST":
            event_id = f"e{next(self._ids)}"
            self.events[event_id] = dict(json_body or {})
            return {"event": {"_id": event_id, **self.events[event_id]}}
        event_id = parts[-1]
        if event_id not in self.events:
            raise EventSyncApiError("HTTP 404", status_code=404, payload={"msg": "Event not found"})
        if method == "PUT":
            self.events[event_id] = dict(json_body or {})
            return {"event": dict(self.events[event_id])}
        del self.events[event_id]
        return {"msg": "Event deleted"}


@pytest.fixture
def config() -> EventSyncConfig:
    return EventSyncConfig(base_url="https://events.example.com/api")


@pytest.fixture
def service(monkeypatch: pytest.MonkeyPatch) -> FakeEventService:
    backend = FakeEventService()

    async def fake_request(_self: Any, method: str, path: str, **kwargs: Any) -> Any:
        return await backend.request(method, path, **kwargs)

    monkeypatch.setattr("eventsync._transport.HttpTransport.request", fake_request)
    return backend


@pytest.mark.asyncio
async def test_full_session_round_trip(config: EventSyncConfig, service: FakeEventService) -> None:
    notifications = NotificationQueue()

    async with EventSyncClient(config, notifier=notifications) as client:
        client.sign_in("tok-123")

        created = await client.create_event({"name": "Gala"})
        assert created.ok
        assert client.state.items == (Event(id="e1", fields={"name": "Gala", "platform": "eventpro"}),)

        updated = await client.update_event(Event(id="e1", fields={"name": "Gala Night"}))
        assert updated.ok
        assert client.state.items[0].fields["name"] == "Gala Night"

        listed = await client.list_events()
        assert listed.ok
        assert [e.id for e in client.state.items] == ["e1"]

        deleted = await client.delete_event("e1")
        assert deleted.ok
        assert client.state.items == ()
        assert client.state.busy is False

    assert [n.message for n in notifications.drain()] == [
        "Event added successfully!",
        "Event updated successfully!",
        "Event deleted successfully!",
    ]


@pytest.mark.asyncio
async def test_token_from_config_seeds_gate(service: FakeEventService) -> None:
    config = EventSyncConfig(base_url="https://events.example.com/api", token="tok-123")
    service.events["e7"] = {"name": "Seeded"}

    async with EventSyncClient(config, notifier=NotificationQueue()) as client:
        result = await client.list_events()

    assert result.ok
    assert result.value == [Event(id="e7", fields={"name": "Seeded"})]


@pytest.mark.asyncio
async def test_rejected_token_surfaces_server_message(config: EventSyncConfig, service: FakeEventService) -> None:
    notifications = NotificationQueue()

    async with EventSyncClient(config, notifier=notifications) as client:
        client.sign_in("stale")
        result = await client.list_events()

        assert result.error == "Token is not valid"
        assert client.state.last_error == "Token is not valid"

        client.acknowledge_error()
        assert client.state.last_error is None

    assert [(n.severity, n.message) for n in notifications.drain()] == [(Severity.ERROR, "Token is not valid")]


@pytest.mark.asyncio
async def test_sign_out_resets_store_and_blocks_calls(config: EventSyncConfig, service: FakeEventService) -> None:
    async with EventSyncClient(config, notifier=NotificationQueue()) as client:
        client.sign_in("tok-123")
        await client.create_event({"name": "Gala"})
        assert len(client.state.items) == 1

        client.sign_out()
        assert client.state.items == ()

        calls_before = dict(service.calls)
        result = await client.list_events()

    assert result.error == "User is not authenticated"
    assert service.calls == calls_before


@pytest.mark.asyncio
async def test_update_of_missing_remote_event(config: EventSyncConfig, service: FakeEventService) -> None:
    async with EventSyncClient(config, notifier=NotificationQueue()) as client:
        client.sign_in("tok-123")
        result = await client.update_event(Event(id="nope", fields={"name": "Ghost"}))

    assert result.error == "Event not found"


@pytest.mark.asyncio
async def test_operations_require_context(config: EventSyncConfig) -> None:
    client = EventSyncClient(config)

    with pytest.raises(EventSyncError, match="not initialized"):
        await client.list_events()


def test_sign_in_needs_session_gate(config: EventSyncConfig) -> None:
    class StaticProvider:
        def current_credential(self) -> str | None:
            return "static"

    client = EventSyncClient(config, gate=StaticProvider())

    with pytest.raises(EventSyncError):
        client.sign_in("tok")
