from .ast import AttributeSpecification, SpecificationFactory, resolve_field
from .base import (
    AndSpecification,
    BaseSpecification,
    NotSpecification,
    OrSpecification,
)
from .evaluator import MemoryOperator, MemoryOperatorRegistry
from .exceptions import (
    FieldNotFoundError,
    OperatorNotFoundError,
    SpecificationError,
    ValidationError,
)
from .keys import KeySpecification, empty_key_for
from .operators import LOGICAL_OPERATORS, SpecificationOperator
from .operators_memory import build_default_registry
from .predicate import compile_predicate
from .tenancy import (
    TENANT_FIELD,
    NoTenantSpecification,
    OptionalTenantSpecification,
    TenantSpecification,
)
from .utils import cast_value

__all__ = [
    # Core types
    "SpecificationOperator",
    "LOGICAL_OPERATORS",
    "AttributeSpecification",
    "SpecificationFactory",
    "BaseSpecification",
    "AndSpecification",
    "OrSpecification",
    "NotSpecification",
    "resolve_field",
    # Leaves
    "KeySpecification",
    "empty_key_for",
    "TENANT_FIELD",
    "TenantSpecification",
    "OptionalTenantSpecification",
    "NoTenantSpecification",
    # Evaluator / strategy
    "MemoryOperator",
    "MemoryOperatorRegistry",
    "build_default_registry",
    "compile_predicate",
    # Exceptions
    "SpecificationError",
    "ValidationError",
    "OperatorNotFoundError",
    "FieldNotFoundError",
    # Utilities
    "cast_value",
]
