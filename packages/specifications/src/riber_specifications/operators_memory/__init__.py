"""Built-in in-memory operators.

Usage::

    from riber_specifications.operators_memory import build_default_registry

    registry = build_default_registry()
    registry.evaluate(SpecificationOperator.EQ, actual, expected)
"""

from __future__ import annotations

from ..evaluator import MemoryOperatorRegistry
from .null import presence_operators
from .set import membership_operators
from .standard import comparison_operators
from .string import text_operators


def build_default_registry() -> MemoryOperatorRegistry:
    """A fresh registry holding every built-in operator."""
    return MemoryOperatorRegistry(
        *comparison_operators(),
        *membership_operators(),
        *text_operators(),
        *presence_operators(),
    )


__all__ = ["MemoryOperatorRegistry", "build_default_registry"]
