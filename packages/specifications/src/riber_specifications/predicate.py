"""Compile a specification's dict form back into an evaluable predicate."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .ast import SpecificationFactory
from .operators_memory import build_default_registry

if TYPE_CHECKING:
    from collections.abc import Callable

    from .evaluator import MemoryOperatorRegistry


def compile_predicate(
    data: dict[str, Any],
    *,
    registry: MemoryOperatorRegistry | None = None,
) -> Callable[[Any], bool]:
    """Return ``candidate -> bool`` for the JSON-AST *data*.

    For every specification ``spec`` and entity ``e``::

        compile_predicate(spec.to_dict())(e) == spec.is_satisfied_by(e)

    The tree is validated and built once; the returned callable can be
    reused across candidates.
    """
    spec = SpecificationFactory.from_dict(
        data,
        registry=registry if registry is not None else build_default_registry(),
    )
    return spec.is_satisfied_by
