"""
SQLAlchemy operator compilation strategy.

Mirrors the in-memory evaluator: one ``SQLAlchemyOperator`` per
:class:`SpecificationOperator`, looked up through a registry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from riber_specifications.exceptions import OperatorNotFoundError

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement

    from riber_specifications.operators import SpecificationOperator


class SQLAlchemyOperator(ABC):
    """Compiles one specification operator into a boolean SQL clause."""

    @property
    @abstractmethod
    def name(self) -> SpecificationOperator: ...

    @abstractmethod
    def apply(self, column: Any, value: Any) -> ColumnElement[bool]:
        """Build the clause for ``column <op> value``."""
        ...


class SQLAlchemyOperatorRegistry:
    def __init__(self) -> None:
        self._operators: dict[SpecificationOperator, SQLAlchemyOperator] = {}

    def register(self, operator: SQLAlchemyOperator) -> None:
        self._operators[operator.name] = operator

    def register_all(self, *operators: SQLAlchemyOperator) -> None:
        for op in operators:
            self.register(op)

    def has(self, name: SpecificationOperator) -> bool:
        return name in self._operators

    @property
    def supported_operators(self) -> set[SpecificationOperator]:
        return set(self._operators)

    def apply(
        self,
        name: SpecificationOperator,
        column: Any,
        value: Any,
    ) -> ColumnElement[bool]:
        """
        Look up the operator and apply it.

        Raises:
            OperatorNotFoundError: If the operator is not registered.
        """
        op = self._operators.get(name)
        if op is None:
            raise OperatorNotFoundError(
                str(name.value), [o.value for o in self._operators]
            )
        return op.apply(column, value)
