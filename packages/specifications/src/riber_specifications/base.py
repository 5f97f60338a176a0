"""Composable specifications.

``a & b``, ``a | b`` and ``~a`` build new nodes and leave their operands
untouched. Chains of the same junction are flattened, so
``a & b & c`` is one AND with three children rather than a nested pair,
which keeps ``to_dict()`` trees shallow for query compilers.
"""

from __future__ import annotations

from typing import Any, ClassVar, Generic, TypeVar

from riber_core.domain.specification import ISpecification

from .operators import SpecificationOperator

T = TypeVar("T", contravariant=True)


class BaseSpecification(Generic[T], ISpecification[T]):
    """Adds the ``&``, ``|`` and ``~`` combinators to a specification."""

    def __and__(self, other: ISpecification[T]) -> AndSpecification[T]:
        return AndSpecification(self, other)

    def __or__(self, other: ISpecification[T]) -> OrSpecification[T]:
        return OrSpecification(self, other)

    def __invert__(self) -> NotSpecification[T]:
        return NotSpecification(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()!r})"


class _Junction(BaseSpecification[T]):
    operator: ClassVar[SpecificationOperator]

    def __init__(self, *specifications: ISpecification[T]) -> None:
        if not specifications:
            raise ValueError(f"{type(self).__name__} needs at least one operand")
        flat: list[ISpecification[T]] = []
        for spec in specifications:
            if type(spec) is type(self):
                flat.extend(spec.specifications)  # type: ignore[attr-defined]
            else:
                flat.append(spec)
        self.specifications: tuple[ISpecification[T], ...] = tuple(flat)

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": self.operator.value,
            "conditions": [spec.to_dict() for spec in self.specifications],
        }


class AndSpecification(_Junction[T]):
    operator = SpecificationOperator.AND

    def is_satisfied_by(self, candidate: T) -> bool:
        return all(spec.is_satisfied_by(candidate) for spec in self.specifications)


class OrSpecification(_Junction[T]):
    operator = SpecificationOperator.OR

    def is_satisfied_by(self, candidate: T) -> bool:
        return any(spec.is_satisfied_by(candidate) for spec in self.specifications)


class NotSpecification(BaseSpecification[T]):
    def __init__(self, specification: ISpecification[T]) -> None:
        self.specification = specification

    def __invert__(self) -> Any:
        # ~~a is a
        return self.specification

    def is_satisfied_by(self, candidate: T) -> bool:
        return not self.specification.is_satisfied_by(candidate)

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": SpecificationOperator.NOT.value,
            "conditions": [self.specification.to_dict()],
        }
