"""ValueObject — immutable pydantic model compared by value."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Frozen model; pydantic derives field-wise ``==`` and a matching hash.

    Validation runs once, in the constructor. Subclasses put their
    invariants in validators so no invalid instance can exist.
    """

    model_config = ConfigDict(frozen=True)
