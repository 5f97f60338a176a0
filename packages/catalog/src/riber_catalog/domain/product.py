"""Product aggregate."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from riber_core.domain.aggregate import AggregateRoot
from riber_core.domain.mixins import AuditableMixin
from riber_core.primitives.id_generator import UUID4Generator, is_nil

from ..exceptions import ProductInvariantError
from .money import Money

if TYPE_CHECKING:
    from riber_core.primitives.id_generator import IIDGenerator


def _require_text(value: str, field: str) -> None:
    if not value or not value.strip():
        raise ProductInvariantError(f"Product {field} cannot be empty")


class Product(AggregateRoot[UUID], AuditableMixin):
    name: str
    description: str
    unit_price: Money
    category_id: UUID
    company_id: UUID
    image_id: UUID | None = None
    is_active: bool = True

    @classmethod
    def create(
        cls,
        name: str,
        description: str,
        price: Decimal | int | float | str,
        category_id: UUID,
        company_id: UUID,
        image_id: UUID | None = None,
        *,
        id_generator: IIDGenerator | None = None,
    ) -> Product:
        """Build a new, active product.

        Raises:
            ProductInvariantError: blank name/description, nil category or company.
            InvalidMoneyError: price is not strictly positive.
        """
        _require_text(name, "name")
        _require_text(description, "description")
        if is_nil(category_id):
            raise ProductInvariantError("Product must reference a category")
        if is_nil(company_id):
            raise ProductInvariantError("Product must belong to a company")

        return cls(
            id_generator=id_generator or UUID4Generator(),
            name=name,
            description=description,
            unit_price=Money.price(price),
            category_id=category_id,
            company_id=company_id,
            image_id=image_id,
        )

    def update_details(
        self, name: str, description: str, price: Decimal | int | float | str
    ) -> None:
        _require_text(name, "name")
        _require_text(description, "description")
        self.unit_price = Money.price(price, self.unit_price.currency)
        self.name = name
        self.description = description
        self.touch()

    def change_category(self, category_id: UUID) -> None:
        if is_nil(category_id):
            raise ProductInvariantError("Product must reference a category")
        self.category_id = category_id
        self.touch()

    def update_image(self, image_id: UUID | None) -> None:
        self.image_id = image_id
        self.touch()

    def activate(self) -> None:
        self.is_active = True
        self.touch()

    def deactivate(self) -> None:
        self.is_active = False
        self.touch()
