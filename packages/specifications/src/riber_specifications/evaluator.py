"""In-memory operator evaluation.

A :class:`MemoryOperatorRegistry` maps each :class:`SpecificationOperator`
to the :class:`MemoryOperator` that evaluates it. Attribute leaves hold a
registry rather than hard-coding comparisons, so a caller can add or
replace operators without touching the leaves.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

from .exceptions import OperatorNotFoundError

if TYPE_CHECKING:
    from .operators import SpecificationOperator


class MemoryOperator(ABC):
    """Evaluates one operator against a resolved attribute value.

    With ``null_matches_nothing`` set, a missing attribute value is False
    before :meth:`compare` runs, the way SQL treats ``NULL`` on either
    side of a comparison.
    """

    name: SpecificationOperator
    null_matches_nothing: ClassVar[bool] = True

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if self.null_matches_nothing and field_value is None:
            return False
        return self.compare(field_value, condition_value)

    @abstractmethod
    def compare(self, field_value: Any, condition_value: Any) -> bool: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name.value!r})"


class MemoryOperatorRegistry:
    def __init__(self, *operators: MemoryOperator) -> None:
        self._operators: dict[SpecificationOperator, MemoryOperator] = {}
        for operator in operators:
            self.register(operator)

    def register(self, operator: MemoryOperator) -> None:
        """Add *operator*, replacing any earlier one with the same name."""
        self._operators[operator.name] = operator

    def __contains__(self, name: object) -> bool:
        return name in self._operators

    def evaluate(
        self, name: SpecificationOperator, field_value: Any, condition_value: Any
    ) -> bool:
        """
        Raises:
            OperatorNotFoundError: *name* has no registered operator.
        """
        try:
            operator = self._operators[name]
        except KeyError:
            raise OperatorNotFoundError(
                name.value, [known.value for known in self._operators]
            ) from None
        return operator.evaluate(field_value, condition_value)
