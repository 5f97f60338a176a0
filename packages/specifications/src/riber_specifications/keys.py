"""Key-equality leaves.

A key leaf matches when the candidate's attribute equals a given key.
Keys are compared exactly: no trimming, no case folding. An empty key
(``None``, ``""`` or the nil UUID) never matches anything, including a
candidate whose attribute is itself empty; use an ``is_null`` leaf to
select absent values.
"""

from __future__ import annotations

import uuid
from typing import Any, TypeVar

from riber_core.primitives.id_generator import NIL_UUID

from .ast import resolve_field
from .base import BaseSpecification
from .operators import SpecificationOperator

T = TypeVar("T", contravariant=True)


def empty_key_for(value: Any) -> Any:
    """Return the default ("empty") value of *value*'s key type."""
    if isinstance(value, uuid.UUID):
        return NIL_UUID
    if isinstance(value, str):
        return ""
    return None


class KeySpecification(BaseSpecification[T]):
    """``candidate.<attr> == key`` where an empty key is always False.

    The dict form spells the empty-key guard out so that any query layer
    reproduces it::

        {"op": "and", "conditions": [
            {"op": "=", "attr": attr, "val": key},
            {"op": "!=", "attr": attr, "val": <empty key>},
            {"op": "is_not_null", "attr": attr},
        ]}
    """

    def __init__(self, attr: str, key: Any) -> None:
        self.attr = attr
        self.key = key
        self.empty = empty_key_for(key)

    @property
    def is_empty_key(self) -> bool:
        return self.key is None or self.key == self.empty

    def is_satisfied_by(self, candidate: T) -> bool:
        if self.is_empty_key:
            return False
        return bool(resolve_field(candidate, self.attr) == self.key)

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": SpecificationOperator.AND.value,
            "conditions": [
                {"op": SpecificationOperator.EQ.value, "attr": self.attr, "val": self.key},
                {
                    "op": SpecificationOperator.NE.value,
                    "attr": self.attr,
                    "val": self.empty,
                },
                {"op": SpecificationOperator.IS_NOT_NULL.value, "attr": self.attr},
            ],
        }
