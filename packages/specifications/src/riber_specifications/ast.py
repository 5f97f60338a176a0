"""Attribute leaves and the dict/JSON specification parser."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Generic, TypeVar, cast

from .base import (
    AndSpecification,
    BaseSpecification,
    NotSpecification,
    OrSpecification,
)
from .exceptions import OperatorNotFoundError, SpecificationError, ValidationError
from .operators import LOGICAL_OPERATORS, SpecificationOperator
from .utils import cast_value

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from riber_core.domain.specification import ISpecification

    from .evaluator import MemoryOperatorRegistry

T = TypeVar("T", contravariant=True)

_LEAF_OPERATORS: frozenset[str] = frozenset(
    m.value for m in SpecificationOperator if m.value not in LOGICAL_OPERATORS
)


def resolve_field(obj: Any, attr_path: str) -> Any:
    """
    Resolve a dot-separated attribute path on *obj*.

    Supports nested attribute access (``price.amount``), mapping keys and
    implicit list traversal (``images.id`` where ``images`` is a list
    returns ``[image.id for image in images]``). A missing attribute
    resolves to ``None``.
    """
    parts = attr_path.split(".")
    for index, part in enumerate(parts):
        if obj is None:
            return None
        if isinstance(obj, list | tuple):
            rest = ".".join(parts[index:])
            return [resolve_field(item, rest) for item in obj]
        obj = obj.get(part) if isinstance(obj, dict) else getattr(obj, part, None)
    return obj


class AttributeSpecification(BaseSpecification[T]):
    """``<attr> <op> <val>``, evaluated through an operator registry."""

    def __init__(
        self,
        attr: str,
        op: SpecificationOperator | str,
        val: Any = None,
        *,
        registry: MemoryOperatorRegistry,
    ) -> None:
        self.attr = attr
        self.op = SpecificationOperator(op)
        self.val = val
        self._registry = registry

    def is_satisfied_by(self, candidate: T) -> bool:
        return self._registry.evaluate(
            self.op, resolve_field(candidate, self.attr), self.val
        )

    def to_dict(self) -> dict[str, Any]:
        return {"op": self.op.value, "attr": self.attr, "val": self.val}


def _problems(
    data: Any, path: str, allowed_fields: Sequence[str] | None
) -> Iterator[SpecificationError]:
    """Yield every structural problem in *data*, depth first."""
    if not isinstance(data, dict):
        yield ValidationError(f"expected dict, got {type(data).__name__}", path=path)
        return

    op = data.get("op")
    if not op or not isinstance(op, str):
        yield ValidationError("missing or empty 'op' key", path=path)
        return
    op = op.lower()

    if op in LOGICAL_OPERATORS:
        conditions = data.get("conditions")
        if not isinstance(conditions, list) or not conditions:
            yield ValidationError(
                f"logical '{op}' requires a non-empty 'conditions' list", path=path
            )
            return
        if op == SpecificationOperator.NOT and len(conditions) != 1:
            yield ValidationError("'not' takes exactly one condition", path=path)
        for idx, child in enumerate(conditions):
            yield from _problems(child, f"{path}.conditions[{idx}]", allowed_fields)
        return

    if op not in _LEAF_OPERATORS:
        yield OperatorNotFoundError(op, _LEAF_OPERATORS, path=path)

    attr = data.get("attr")
    if not attr or not isinstance(attr, str):
        yield ValidationError("missing 'attr'", path=path)
    elif allowed_fields is not None and attr not in allowed_fields:
        yield ValidationError(f"field '{attr}' is not allowed", path=path)


class SpecificationFactory(Generic[T]):
    """
    Builds specification trees from their ``to_dict()`` form.

    ``from_dict`` and ``from_json`` raise the first problem found;
    ``validate`` reports all of them. Leaves may carry a ``value_type``
    hint so JSON-encoded values (UUIDs, dates, decimals) are restored
    before comparison.
    """

    @staticmethod
    def from_dict(
        data: dict[str, Any],
        *,
        allowed_fields: Sequence[str] | None = None,
        registry: MemoryOperatorRegistry,
    ) -> ISpecification[T]:
        """Parse *data*, injecting *registry* into every leaf.

        Raises:
            ValidationError: The tree is malformed or names a field outside
                *allowed_fields*.
            OperatorNotFoundError: A leaf uses an unknown operator.
        """
        problem = next(_problems(data, "<root>", allowed_fields), None)
        if problem is not None:
            raise problem
        return SpecificationFactory._build(data, registry)

    @staticmethod
    def from_json(
        text: str,
        *,
        allowed_fields: Sequence[str] | None = None,
        registry: MemoryOperatorRegistry,
    ) -> ISpecification[T]:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Invalid JSON: {exc}", path="<root>") from exc
        if not isinstance(data, dict):
            raise ValidationError("Top-level JSON value must be an object", path="<root>")
        return SpecificationFactory.from_dict(
            data, allowed_fields=allowed_fields, registry=registry
        )

    @staticmethod
    def validate(
        data: dict[str, Any], *, allowed_fields: Sequence[str] | None = None
    ) -> list[str]:
        """Every problem in *data* as ``"<path>: <message>"``; empty when valid."""
        return [
            f"{getattr(problem, 'path', None) or '<root>'}: {problem}"
            for problem in _problems(data, "<root>", allowed_fields)
        ]

    @staticmethod
    def _build(data: dict[str, Any], registry: MemoryOperatorRegistry) -> ISpecification[T]:
        op = data["op"].lower()
        if op not in LOGICAL_OPERATORS:
            val = cast_value(data.get("val"), data.get("value_type"))
            return cast(
                "ISpecification[T]",
                AttributeSpecification(data["attr"], op, val, registry=registry),
            )

        children = [SpecificationFactory._build(c, registry) for c in data["conditions"]]
        if op == SpecificationOperator.AND:
            return AndSpecification(*children)
        if op == SpecificationOperator.OR:
            return OrSpecification(*children)
        return NotSpecification(children[0])
