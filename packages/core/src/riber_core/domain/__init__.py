"""Domain primitives: aggregates, events, value objects, mixins."""

from __future__ import annotations

from .aggregate import AggregateRoot
from .events import DomainEvent, enrich_event_metadata
from .mixins import AuditableMixin, SoftDeleteMixin
from .specification import ISpecification
from .value_object import ValueObject

__all__: list[str] = [
    "AggregateRoot",
    "AuditableMixin",
    "DomainEvent",
    "ISpecification",
    "SoftDeleteMixin",
    "ValueObject",
    "enrich_event_metadata",
]
