"""Data models for the event service."""

from eventsync.models.event import ID_KEY, Event, extract_id, strip_id

__all__ = [
    "ID_KEY",
    "Event",
    "extract_id",
    "strip_id",
]
