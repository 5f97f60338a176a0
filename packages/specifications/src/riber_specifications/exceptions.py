"""Specification errors.

Every error renders to a flat dict through ``to_dict()`` so API layers
can return it unchanged. Lookups that fail by name (operators, fields)
carry close matches in ``suggestions``.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import TYPE_CHECKING, Any, ClassVar

from riber_core.primitives.exceptions import RiberError

if TYPE_CHECKING:
    from collections.abc import Iterable


class SpecificationError(RiberError):
    code: ClassVar[str] = "SPECIFICATION_ERROR"

    def details(self) -> dict[str, Any]:
        return {"message": str(self)}

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, **self.details()}


class ValidationError(SpecificationError):
    """A specification tree is malformed at *path*."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message)

    def details(self) -> dict[str, Any]:
        return {"message": self.message, "path": self.path}


class _UnknownNameError(SpecificationError):
    max_suggestions: ClassVar[int] = 3

    def __init__(self, name: str, known: Iterable[str], message: str) -> None:
        self.known = sorted(known)
        self.suggestions = get_close_matches(
            name, self.known, n=self.max_suggestions, cutoff=0.6
        )
        if self.suggestions:
            message = f"{message} Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message)


class OperatorNotFoundError(_UnknownNameError):
    code = "OPERATOR_NOT_FOUND"

    def __init__(
        self, operator: str, valid_operators: Iterable[str], path: str | None = None
    ) -> None:
        self.operator = operator
        self.path = path
        super().__init__(operator, valid_operators, f"unknown operator '{operator}'.")

    @property
    def valid_operators(self) -> list[str]:
        return self.known

    def details(self) -> dict[str, Any]:
        return {
            "operator": self.operator,
            "suggestions": self.suggestions,
            "valid_operators": self.known,
        }


class FieldNotFoundError(_UnknownNameError):
    """An ``attr`` that is not a column of the model being queried."""

    code = "FIELD_NOT_FOUND"
    max_suggestions = 5

    def __init__(
        self, invalid_field: str, model_name: str, available_fields: Iterable[str]
    ) -> None:
        self.invalid_field = invalid_field
        self.model_name = model_name
        super().__init__(
            invalid_field,
            available_fields,
            f"Invalid field '{invalid_field}' on '{model_name}'.",
        )

    @property
    def available_fields(self) -> list[str]:
        return self.known

    def details(self) -> dict[str, Any]:
        return {
            "field": self.invalid_field,
            "model": self.model_name,
            "suggestions": self.suggestions,
            "available_fields": self.known,
        }
