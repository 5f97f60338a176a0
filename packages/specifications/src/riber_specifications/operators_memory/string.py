"""Text operators: contains, icontains, startswith.

Both sides are compared as ``str``; a missing value never matches.
"""

from __future__ import annotations

from typing import Any

from ..evaluator import MemoryOperator
from ..operators import SpecificationOperator


class ContainsOperator(MemoryOperator):
    def __init__(self, *, ignore_case: bool = False) -> None:
        self.ignore_case = ignore_case
        self.name = (
            SpecificationOperator.ICONTAINS if ignore_case else SpecificationOperator.CONTAINS
        )

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        haystack, needle = str(field_value), str(condition_value)
        if self.ignore_case:
            haystack, needle = haystack.casefold(), needle.casefold()
        return needle in haystack


class StartsWithOperator(MemoryOperator):
    name = SpecificationOperator.STARTSWITH

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        return str(field_value).startswith(str(condition_value))


def text_operators() -> list[MemoryOperator]:
    return [
        ContainsOperator(),
        ContainsOperator(ignore_case=True),
        StartsWithOperator(),
    ]
