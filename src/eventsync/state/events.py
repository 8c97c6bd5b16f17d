"""Operation lifecycle records.

Each store operation moves through exactly one of two paths:
``REQUESTED -> SETTLED_OK`` or ``REQUESTED -> SETTLED_ERROR``.
"""

from __future__ import annotations

import dataclasses
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OperationKind(StrEnum):
    LIST = "list"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class OperationPhase(StrEnum):
    REQUESTED = "requested"
    SETTLED_OK = "settled_ok"
    SETTLED_ERROR = "settled_error"


class OperationTransition(BaseModel):
    """A lifecycle transition, delivered to the store's observability hook."""

    model_config = ConfigDict(frozen=True)

    operation_id: int = Field(..., description="Store-local sequence number of the operation")
    kind: OperationKind
    phase: OperationPhase
    observed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    message: str | None = Field(default=None, description="Normalized error message, if settled with an error")
    in_flight: int = Field(default=0, description="Operations outstanding after this transition")

    @field_validator("observed_at")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


@dataclasses.dataclass(frozen=True, slots=True)
class OperationResult:
    """Outcome returned by every store operation.

    ``value`` holds the operation's payload on success (the fetched list,
    the created/updated :class:`~eventsync.models.Event`, or the deleted id).
    ``error`` holds the normalized message on failure.
    """

    kind: OperationKind
    phase: OperationPhase
    value: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.phase is OperationPhase.SETTLED_OK

    @classmethod
    def success(cls, kind: OperationKind, value: Any = None) -> OperationResult:
        return cls(kind=kind, phase=OperationPhase.SETTLED_OK, value=value)

    @classmethod
    def failure(cls, kind: OperationKind, message: str) -> OperationResult:
        return cls(kind=kind, phase=OperationPhase.SETTLED_ERROR, error=message)
