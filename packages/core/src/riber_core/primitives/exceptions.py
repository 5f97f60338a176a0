"""Domain and infrastructure exceptions for riber-core."""

from __future__ import annotations


class RiberError(Exception):
    """Root exception for every Riber package."""


class DomainError(RiberError):
    """Base class for all domain-related errors."""


class NotFoundError(DomainError):
    """Raised when an aggregate or resource is not found."""


class EntityNotFoundError(NotFoundError):
    """Raised when a specific entity cannot be found by ID."""

    def __init__(self, entity_type: str, entity_id: object) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id={entity_id!r} not found")


class InvariantViolationError(DomainError):
    """Raised when a domain invariant is violated."""


class ValidationError(RiberError):
    """Raised when command validation fails.

    Carries structured errors: ``{field: [messages]}``.
    """

    def __init__(self, errors: dict[str, list[str]] | str | None = None) -> None:
        if isinstance(errors, str):
            self.errors: dict[str, list[str]] = {"__root__": [errors]}
        elif errors is None:
            self.errors = {}
        else:
            self.errors = errors
        super().__init__(str(self.errors))


class InfrastructureError(RiberError):
    """Base class for all infrastructure-related errors."""


class PersistenceError(InfrastructureError):
    """Base class for all persistence-related errors."""


class StorageError(InfrastructureError):
    """Base class for external blob storage failures.

    Carries the storage key involved, when one is known.
    """

    def __init__(self, message: str, key: str | None = None) -> None:
        self.key = key
        super().__init__(message)


class HandlerError(RiberError):
    """Base class for all handler related errors (registration, lookup, execution)."""


class TenantContextError(RiberError):
    """Raised when an operation requires a current tenant but none is set."""
