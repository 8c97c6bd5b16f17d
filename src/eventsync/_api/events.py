"""Event collection endpoints: ``GET/POST {events_path}``, ``PUT/DELETE {events_path}/{id}``."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from pydantic import ValidationError

from eventsync._api._common import build_auth_headers
from eventsync._transport import Transport
from eventsync.config import EventSyncConfig
from eventsync.exceptions import EventSyncResponseError
from eventsync.models.event import Event, extract_id, strip_id

#: Key of the scope tag attached to create/update bodies.
SCOPE_KEY = "platform"

#: Key wrapping the event in create/update responses.
_EVENT_KEY = "event"


def _item_path(config: EventSyncConfig, event_id: str) -> str:
    return f"{config.events_path}/{quote(event_id, safe='')}"


def build_event_body(config: EventSyncConfig, fields: Mapping[str, Any]) -> dict[str, Any]:
    """Fields plus the scope tag. Identifier keys are never sent in the body."""
    return {**strip_id(fields), SCOPE_KEY: config.scope}


def _parse_event(endpoint: str, item: Any) -> Event:
    if not isinstance(item, dict):
        raise EventSyncResponseError(f"{endpoint} returned a non-object event: {item!r:.128}", endpoint=endpoint)
    try:
        return Event.from_payload(item)
    except ValidationError as exc:
        raise EventSyncResponseError(f"{endpoint} returned an invalid event: {exc}", endpoint=endpoint) from exc


def _unwrap_event(response: Any) -> dict[str, Any] | None:
    if isinstance(response, dict):
        event = response.get(_EVENT_KEY)
        if isinstance(event, dict):
            return event
    return None


def resolve_event_id(returned: Mapping[str, Any], sent_id: str) -> str:
    """Prefer the id echoed by the service; fall back to the id that was sent."""
    return extract_id(returned) or sent_id


async def fetch_events(
    config: EventSyncConfig,
    transport: Transport,
    credential: str,
) -> list[Event]:
    """Fetch every event owned by the configured scope."""
    endpoint = config.events_path
    response = await transport.request(
        "GET",
        endpoint,
        headers=build_auth_headers(config.auth_header, credential),
        params={SCOPE_KEY: config.scope},
    )
    if not isinstance(response, list):
        raise EventSyncResponseError(f"{endpoint} did not return a list", endpoint=endpoint)
    return [_parse_event(endpoint, item) for item in response]


async def create_event(
    config: EventSyncConfig,
    transport: Transport,
    credential: str,
    fields: Mapping[str, Any],
) -> Event:
    """Create an event and return it with its server-assigned id."""
    endpoint = config.events_path
    response = await transport.request(
        "POST",
        endpoint,
        headers=build_auth_headers(config.auth_header, credential),
        json_body=build_event_body(config, fields),
    )
    event = _unwrap_event(response)
    if event is None:
        raise EventSyncResponseError(f"{endpoint} create returned no event", endpoint=endpoint)
    return _parse_event(endpoint, event)


async def update_event(
    config: EventSyncConfig,
    transport: Transport,
    credential: str,
    event: Event,
) -> Event:
    """Replace an event's fields remotely.

    The returned event's id is the one in the response when present, else
    the id that was sent. When the response carries no event object the sent
    fields are taken as the confirmed state.
    """
    endpoint = _item_path(config, event.id)
    response = await transport.request(
        "PUT",
        endpoint,
        headers=build_auth_headers(config.auth_header, credential),
        json_body=build_event_body(config, event.fields),
    )
    returned = _unwrap_event(response)
    if returned is None:
        return event
    resolved_id = resolve_event_id(returned, event.id)
    return Event(id=resolved_id, fields=strip_id(returned))


async def delete_event(
    config: EventSyncConfig,
    transport: Transport,
    credential: str,
    event_id: str,
) -> str:
    """Delete an event; returns the id that was removed."""
    endpoint = _item_path(config, event_id)
    await transport.request(
        "DELETE",
        endpoint,
        headers=build_auth_headers(config.auth_header, credential),
    )
    return event_id
