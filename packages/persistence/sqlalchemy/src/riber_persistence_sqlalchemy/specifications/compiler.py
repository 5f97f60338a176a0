"""
Compile a specification dictionary (AST) into a SQLAlchemy filter expression.

``build_sqla_filter`` walks the ``{"op", "attr", "val"}`` /
``{"op", "conditions"}`` tree produced by ``spec.to_dict()`` and hands
each leaf to a :class:`SQLAlchemyOperatorRegistry`. Leaves may carry a
``value_type`` hint (from JSON transport); the value is cast the same
way the in-memory factory casts it.

NOT follows SQL three-valued logic: ``NOT (col = x)`` does not select
rows where ``col`` is NULL, whereas the in-memory evaluator would.
Specifications that need to match missing values say so explicitly
with ``is_null``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, inspect, not_, or_

from riber_specifications.exceptions import (
    FieldNotFoundError,
    OperatorNotFoundError,
    ValidationError,
)
from riber_specifications.operators import SpecificationOperator
from riber_specifications.utils import cast_value

from .operators import DEFAULT_SQLA_REGISTRY

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from .strategy import SQLAlchemyOperatorRegistry


def build_sqla_filter(
    model: type[Any],
    data: dict[str, Any],
    *,
    registry: SQLAlchemyOperatorRegistry | None = None,
) -> ColumnElement[bool]:
    """
    Build a SQLAlchemy filter expression from a specification dictionary.

    Args:
        model: The mapped model class the ``attr`` names refer to.
        data: Specification dictionary produced by ``spec.to_dict()``.
        registry: Optional custom operator registry.

    Raises:
        FieldNotFoundError: An ``attr`` is not a column of *model*.
        OperatorNotFoundError: An ``op`` has no SQL translation.
        ValidationError: A node is malformed.
    """
    return _compile_node(model, data, registry or DEFAULT_SQLA_REGISTRY, path="<root>")


def _compile_node(
    model: type[Any],
    data: dict[str, Any],
    registry: SQLAlchemyOperatorRegistry,
    *,
    path: str,
) -> ColumnElement[bool]:
    if not isinstance(data, dict) or not data.get("op"):
        raise ValidationError(f"Expected a specification node, got {data!r}", path=path)

    op_str = str(data["op"]).lower()

    if op_str in (SpecificationOperator.AND, SpecificationOperator.OR, SpecificationOperator.NOT):
        conditions = data.get("conditions") or []
        if not conditions:
            raise ValidationError(f"'{op_str}' requires conditions", path=path)
        children = [
            _compile_node(model, child, registry, path=f"{path}.conditions[{i}]")
            for i, child in enumerate(conditions)
        ]
        if op_str == SpecificationOperator.AND:
            return and_(*children)
        if op_str == SpecificationOperator.OR:
            return or_(*children)
        if len(children) != 1:
            raise ValidationError("'not' takes exactly one condition", path=path)
        return not_(children[0])

    return _compile_leaf(model, data, registry, op_str, path=path)


def _compile_leaf(
    model: type[Any],
    data: dict[str, Any],
    registry: SQLAlchemyOperatorRegistry,
    op_str: str,
    *,
    path: str,
) -> ColumnElement[bool]:
    attr = data.get("attr")
    if not attr:
        raise ValidationError(f"Leaf specification missing 'attr': {data}", path=path)

    column = _resolve_column(model, attr)
    value = cast_value(data.get("val"), data.get("value_type"))

    try:
        op = SpecificationOperator(op_str)
    except ValueError:
        raise OperatorNotFoundError(
            op_str, [o.value for o in SpecificationOperator]
        ) from None
    return registry.apply(op, column, value)


def _resolve_column(model: type[Any], attr: str) -> Any:
    columns = inspect(model).columns
    if attr not in columns:
        raise FieldNotFoundError(attr, model.__name__, list(columns.keys()))
    return getattr(model, attr)
