"""Tenant isolation predicates.

Entities fall into three tenant shapes:

- *tenant-bound*: always owned by a company (``TenantSpecification``)
- *optionally tenant-bound*: may have no company (``OptionalTenantSpecification``)
- *tenant-less*: global rows (``NoTenantSpecification``)

The nil UUID is never a tenant. Asking for tenant ``nil`` (or ``None``)
matches nothing, and an entity whose tenant was explicitly set to ``nil`` is
neither "owned by X" nor "tenant-less".
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from riber_core.primitives.id_generator import NIL_UUID, is_nil

from .ast import resolve_field
from .base import BaseSpecification
from .operators import SpecificationOperator

if TYPE_CHECKING:
    from uuid import UUID

T = TypeVar("T", contravariant=True)

TENANT_FIELD = "company_id"


class TenantSpecification(BaseSpecification[T]):
    """Entity tenant equals *tenant_id*, and *tenant_id* is a real tenant."""

    def __init__(self, tenant_id: UUID | None, *, attr: str = TENANT_FIELD) -> None:
        self.tenant_id = tenant_id
        self.attr = attr

    @property
    def key(self) -> UUID:
        return self.tenant_id if self.tenant_id is not None else NIL_UUID

    def is_satisfied_by(self, candidate: T) -> bool:
        if is_nil(self.tenant_id):
            return False
        return bool(resolve_field(candidate, self.attr) == self.tenant_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": SpecificationOperator.AND.value,
            "conditions": [
                {
                    "op": SpecificationOperator.EQ.value,
                    "attr": self.attr,
                    "val": self.key,
                },
                {"op": SpecificationOperator.NE.value, "attr": self.attr, "val": NIL_UUID},
            ],
        }


class OptionalTenantSpecification(BaseSpecification[T]):
    """Entity has a tenant and it equals *tenant_id*.

    False when the entity has no tenant, when the tenants differ, and
    when *tenant_id* is nil.
    """

    def __init__(self, tenant_id: UUID | None, *, attr: str = TENANT_FIELD) -> None:
        self.tenant_id = tenant_id
        self.attr = attr

    @property
    def key(self) -> UUID:
        return self.tenant_id if self.tenant_id is not None else NIL_UUID

    def is_satisfied_by(self, candidate: T) -> bool:
        if is_nil(self.tenant_id):
            return False
        actual = resolve_field(candidate, self.attr)
        return actual is not None and actual == self.tenant_id

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": SpecificationOperator.AND.value,
            "conditions": [
                {"op": SpecificationOperator.IS_NOT_NULL.value, "attr": self.attr},
                {
                    "op": SpecificationOperator.EQ.value,
                    "attr": self.attr,
                    "val": self.key,
                },
                {"op": SpecificationOperator.NE.value, "attr": self.attr, "val": NIL_UUID},
            ],
        }


class NoTenantSpecification(BaseSpecification[T]):
    """Entity tenant is genuinely absent (``None``).

    An explicit nil UUID is a stored value, not an absence, so it does
    not match.
    """

    def __init__(self, *, attr: str = TENANT_FIELD) -> None:
        self.attr = attr

    def is_satisfied_by(self, candidate: T) -> bool:
        return resolve_field(candidate, self.attr) is None

    def to_dict(self) -> dict[str, Any]:
        return {"op": SpecificationOperator.IS_NULL.value, "attr": self.attr}
