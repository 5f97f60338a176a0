"""Domain Event base class."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class DomainEvent(BaseModel):
    """Base class for all Domain Events.

    Events are immutable and carry tracing context. ``aggregate_id`` and
    ``aggregate_type`` identify the aggregate the event is about, when
    there is one.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    event_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    aggregate_id: str | None = None
    aggregate_type: str | None = None
    correlation_id: str | None = None
    tenant_id: str | None = None


def enrich_event_metadata(
    event: DomainEvent,
    *,
    correlation_id: str | None = None,
    tenant_id: str | None = None,
) -> DomainEvent:
    """Return a copy of *event* with context IDs injected.

    If the event already carries a value it is kept.
    """
    updates: dict[str, str] = {}
    if correlation_id and not event.correlation_id:
        updates["correlation_id"] = correlation_id
    if tenant_id and not event.tenant_id:
        updates["tenant_id"] = tenant_id

    if not updates:
        return event

    return event.model_copy(update=updates)
