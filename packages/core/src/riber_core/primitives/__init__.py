"""Primitives: exceptions, ID generation."""

from __future__ import annotations

from .exceptions import (
    DomainError,
    EntityNotFoundError,
    HandlerError,
    InfrastructureError,
    InvariantViolationError,
    NotFoundError,
    PersistenceError,
    RiberError,
    StorageError,
    TenantContextError,
    ValidationError,
)
from .id_generator import NIL_UUID, IIDGenerator, UUID4Generator, is_nil

__all__ = [
    "DomainError",
    "EntityNotFoundError",
    "HandlerError",
    "IIDGenerator",
    "InfrastructureError",
    "InvariantViolationError",
    "NIL_UUID",
    "NotFoundError",
    "PersistenceError",
    "RiberError",
    "StorageError",
    "TenantContextError",
    "UUID4Generator",
    "ValidationError",
    "is_nil",
]
