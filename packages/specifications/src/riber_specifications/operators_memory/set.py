"""Membership operators: in, not_in, between.

A missing value is in no set and outside every range, so ``not_in``
also rejects it, as SQL ``NOT IN`` does for ``NULL``.
"""

from __future__ import annotations

from typing import Any

from ..evaluator import MemoryOperator
from ..operators import SpecificationOperator


class InOperator(MemoryOperator):
    name = SpecificationOperator.IN

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        return field_value in condition_value


class NotInOperator(MemoryOperator):
    name = SpecificationOperator.NOT_IN

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        return field_value not in condition_value


class BetweenOperator(MemoryOperator):
    """Inclusive on both ends, like SQL ``BETWEEN``."""

    name = SpecificationOperator.BETWEEN

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        low, high = condition_value
        return bool(low <= field_value <= high)


def membership_operators() -> list[MemoryOperator]:
    return [InOperator(), NotInOperator(), BetweenOperator()]
