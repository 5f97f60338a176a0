"""Presence checks: is_null, is_not_null, is_empty, is_not_empty.

"Empty" means ``None`` or the empty string.
"""

from __future__ import annotations

from typing import Any

from ..evaluator import MemoryOperator
from ..operators import SpecificationOperator


class PresenceOperator(MemoryOperator):
    null_matches_nothing = False

    def __init__(
        self, name: SpecificationOperator, *, absent: bool, blank_is_absent: bool
    ) -> None:
        self.name = name
        self.absent = absent
        self.blank_is_absent = blank_is_absent

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        missing = field_value is None or (self.blank_is_absent and field_value == "")
        return bool(missing) == self.absent


def presence_operators() -> list[MemoryOperator]:
    return [
        PresenceOperator(SpecificationOperator.IS_NULL, absent=True, blank_is_absent=False),
        PresenceOperator(
            SpecificationOperator.IS_NOT_NULL, absent=False, blank_is_absent=False
        ),
        PresenceOperator(SpecificationOperator.IS_EMPTY, absent=True, blank_is_absent=True),
        PresenceOperator(
            SpecificationOperator.IS_NOT_EMPTY, absent=False, blank_is_absent=True
        ),
    ]
