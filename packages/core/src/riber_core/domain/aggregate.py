"""AggregateRoot — pydantic base for domain objects with a typed identity."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from ..primitives.id_generator import IIDGenerator

ID = TypeVar("ID", str, int, UUID)


class AggregateRoot(BaseModel, Generic[ID]):
    """
    An aggregate is created with an ``id_generator`` or rehydrated with an ``id``::

        class Product(AggregateRoot[UUID]):
            name: str

        Product(id_generator=UUID4Generator(), name="Coffee")  # new
        Product(id=row.id, name=row.name)                      # from storage

    A subclass may instead give ``id`` a default.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: ID

    def __init__(self, id_generator: IIDGenerator | None = None, **data: Any) -> None:
        if "id" not in data:
            if id_generator is not None:
                data["id"] = id_generator.next_id()
            elif type(self).model_fields["id"].is_required():
                raise ValueError(
                    f"{type(self).__name__} needs an 'id' or an id_generator"
                )
        super().__init__(**data)
