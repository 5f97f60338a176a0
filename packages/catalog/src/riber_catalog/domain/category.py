"""Product category aggregate."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from riber_core.domain.aggregate import AggregateRoot
from riber_core.domain.mixins import AuditableMixin
from riber_core.primitives.id_generator import UUID4Generator, is_nil

from ..exceptions import ProductInvariantError

if TYPE_CHECKING:
    from riber_core.primitives.id_generator import IIDGenerator


class ProductCategory(AggregateRoot[UUID], AuditableMixin):
    """A tenant-owned grouping of products.

    ``code`` is stored upper-cased and ``name`` trimmed; lookups by code
    compare against the stored form exactly.
    """

    name: str
    description: str = ""
    code: str
    company_id: UUID
    is_active: bool = True

    @classmethod
    def create(
        cls,
        name: str,
        description: str,
        code: str,
        company_id: UUID,
        *,
        id_generator: IIDGenerator | None = None,
    ) -> ProductCategory:
        if not name or not name.strip():
            raise ProductInvariantError("Category name cannot be empty")
        if not code or not code.strip():
            raise ProductInvariantError("Category code cannot be empty")
        if is_nil(company_id):
            raise ProductInvariantError("Category must belong to a company")

        return cls(
            id_generator=id_generator or UUID4Generator(),
            name=name.strip(),
            description=description or "",
            code=code.strip().upper(),
            company_id=company_id,
        )

    def update_details(self, name: str, description: str) -> None:
        if not name or not name.strip():
            raise ProductInvariantError("Category name cannot be empty")
        self.name = name.strip()
        self.description = description or ""
        self.touch()

    def activate(self) -> None:
        self.is_active = True
        self.touch()

    def deactivate(self) -> None:
        self.is_active = False
        self.touch()
