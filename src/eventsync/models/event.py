"""Event record model.

The synchronization layer does not interpret event attributes. An
:class:`Event` is an opaque ``fields`` mapping keyed by a server-assigned
``id``; on the wire the id travels as ``_id`` next to the attributes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

#: Wire key carrying the server-assigned identifier.
ID_KEY = "_id"

#: Accepted as the identifier only when ``_id`` is absent or blank.
_FALLBACK_ID_KEY = "id"


def _id_source(payload: Mapping[str, Any]) -> str | None:
    """Name of the key that supplies *payload*'s identifier, if any."""
    for key in (ID_KEY, _FALLBACK_ID_KEY):
        value = payload.get(key)
        if value is not None and str(value).strip():
            return key
    return None


def extract_id(payload: Mapping[str, Any]) -> str | None:
    """Return the identifier carried by *payload*, or ``None`` if absent/blank."""
    key = _id_source(payload)
    return str(payload[key]).strip() if key is not None else None


def strip_id(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of *payload* without its identifier.

    ``_id`` is always dropped. A plain ``id`` is dropped only when it is what
    identifies the record; next to an ``_id`` it is an ordinary attribute.
    """
    dropped = {ID_KEY}
    if _id_source(payload) == _FALLBACK_ID_KEY:
        dropped.add(_FALLBACK_ID_KEY)
    return {k: v for k, v in payload.items() if k not in dropped}


class Event(BaseModel):
    """A synchronized event record.

    Parameters
    ----------
    id : str
        Opaque identifier assigned by the remote service.
    fields : dict
        Every other attribute (name, date, venue, ...), passed through
        unchanged.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    fields: dict[str, Any] = Field(default_factory=dict)

    @field_validator("id", mode="before")
    @classmethod
    def _normalize_id(cls, value: Any) -> str:
        if value is None:
            raise ValueError("id must be non-empty")
        text = str(value).strip()
        if not text:
            raise ValueError("id must be non-empty")
        return text

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> Event:
        """Build an event from a flat wire payload."""
        return cls(id=extract_id(payload), fields=strip_id(payload))

    def to_payload(self) -> dict[str, Any]:
        """Flatten back to the wire representation."""
        return {ID_KEY: self.id, **self.fields}
