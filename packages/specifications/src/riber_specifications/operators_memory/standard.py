"""Comparison operators: =, !=, >, <, >=, <=.

Equality compares anything, ``None`` included. Ordering against a
missing value on either side is False rather than a ``TypeError``,
matching SQL where ``NULL > x`` never selects a row.
"""

from __future__ import annotations

import operator
from typing import TYPE_CHECKING, Any

from ..evaluator import MemoryOperator
from ..operators import SpecificationOperator

if TYPE_CHECKING:
    from collections.abc import Callable


class ComparisonOperator(MemoryOperator):
    def __init__(
        self,
        name: SpecificationOperator,
        function: Callable[[Any, Any], Any],
        *,
        ordering: bool = False,
    ) -> None:
        self.name = name
        self.function = function
        self.ordering = ordering

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if self.ordering and (field_value is None or condition_value is None):
            return False
        return self.compare(field_value, condition_value)

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        return bool(self.function(field_value, condition_value))


def comparison_operators() -> list[MemoryOperator]:
    return [
        ComparisonOperator(SpecificationOperator.EQ, operator.eq),
        ComparisonOperator(SpecificationOperator.NE, operator.ne),
        ComparisonOperator(SpecificationOperator.GT, operator.gt, ordering=True),
        ComparisonOperator(SpecificationOperator.LT, operator.lt, ordering=True),
        ComparisonOperator(SpecificationOperator.GE, operator.ge, ordering=True),
        ComparisonOperator(SpecificationOperator.LE, operator.le, ordering=True),
    ]
