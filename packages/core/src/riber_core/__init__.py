"""riber-core — domain primitives, ports and in-process plumbing for Riber.

No infrastructure dependencies beyond pydantic.
"""

from __future__ import annotations

# ── Adapters ────────────────────────────────────────────────────
from .adapters.memory import InMemoryUnitOfWork
from .correlation import (
    ensure_correlation_id,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)

# ── CQRS ─────────────────────────────────────────────────────────
from .cqrs import Command, EventDispatcher, InProcessEventPublisher

# ── Domain ───────────────────────────────────────────────────────
from .domain import (
    AggregateRoot,
    AuditableMixin,
    DomainEvent,
    ISpecification,
    SoftDeleteMixin,
    ValueObject,
    enrich_event_metadata,
)

# ── Instrumentation ──────────────────────────────────────────────
from .instrumentation import (
    HookRegistration,
    HookRegistry,
    InstrumentationHook,
    get_hook_registry,
    set_hook_registry,
)

# ── Ports ────────────────────────────────────────────────────────
from .ports import (
    EventHandler,
    IBackgroundWorker,
    IEventDispatcher,
    IEventPublisher,
    UnitOfWork,
)

# ── Primitives ───────────────────────────────────────────────────
from .primitives import (
    NIL_UUID,
    DomainError,
    EntityNotFoundError,
    HandlerError,
    IIDGenerator,
    InfrastructureError,
    InvariantViolationError,
    NotFoundError,
    PersistenceError,
    RiberError,
    StorageError,
    TenantContextError,
    UUID4Generator,
    ValidationError,
    is_nil,
)
from .tenancy import get_tenant_id, require_tenant_id, set_tenant_id
from .validation import ValidationResult

__all__ = [
    "NIL_UUID",
    "AggregateRoot",
    "AuditableMixin",
    "Command",
    "DomainError",
    "DomainEvent",
    "EntityNotFoundError",
    "EventDispatcher",
    "EventHandler",
    "HandlerError",
    "HookRegistration",
    "HookRegistry",
    "IBackgroundWorker",
    "IEventDispatcher",
    "IEventPublisher",
    "IIDGenerator",
    "ISpecification",
    "InMemoryUnitOfWork",
    "InProcessEventPublisher",
    "InfrastructureError",
    "InstrumentationHook",
    "InvariantViolationError",
    "NotFoundError",
    "PersistenceError",
    "RiberError",
    "SoftDeleteMixin",
    "StorageError",
    "TenantContextError",
    "UUID4Generator",
    "UnitOfWork",
    "ValidationError",
    "ValidationResult",
    "ValueObject",
    "enrich_event_metadata",
    "ensure_correlation_id",
    "generate_correlation_id",
    "get_correlation_id",
    "get_hook_registry",
    "get_tenant_id",
    "is_nil",
    "require_tenant_id",
    "set_correlation_id",
    "set_hook_registry",
    "set_tenant_id",
]
