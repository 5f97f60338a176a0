"""Reusable domain mixins."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from ..primitives.exceptions import InvariantViolationError


class AuditableMixin(BaseModel):
    """Mixin that adds created_at / updated_at timestamps."""

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None

    def touch(self) -> None:
        """Update the ``updated_at`` timestamp to *now*."""
        object.__setattr__(self, "updated_at", datetime.now(timezone.utc))


class SoftDeleteMixin(BaseModel):
    """Mixin for entities whose rows are retained after logical deletion.

    A soft-deleted entity keeps its record (``deleted_at`` is set) so that
    background sweeps can still see it, but it no longer takes part in
    normal queries.
    """

    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        """Return True if the entity has been soft-deleted."""
        return self.deleted_at is not None

    def delete_entity(self) -> None:
        """Mark as deleted. Raises if already deleted."""
        if self.deleted_at is not None:
            raise InvariantViolationError("Already deleted")
        object.__setattr__(self, "deleted_at", datetime.now(timezone.utc))

    def restore_entity(self) -> None:
        """Clear the deletion mark. Raises if not deleted."""
        if self.deleted_at is None:
            raise InvariantViolationError("Not deleted")
        object.__setattr__(self, "deleted_at", None)
