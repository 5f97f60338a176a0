"""Tests for SpecificationFactory (validation, from_json, value_type)."""

from __future__ import annotations

import json
from uuid import UUID, uuid4

import pytest

from riber_core.domain.aggregate import AggregateRoot
from riber_specifications import SpecificationFactory
from riber_specifications.exceptions import (
    OperatorNotFoundError,
    ValidationError,
)


class MockAggregate(AggregateRoot[UUID]):
    name: str
    age: int
    company_id: UUID | None = None


@pytest.fixture
def candidate() -> MockAggregate:
    return MockAggregate(id=uuid4(), name="Alice", age=28)


# -- from_json ---------------------------------------------------------------


def test_from_json_basic(candidate: MockAggregate, registry):
    payload = json.dumps({"op": "=", "attr": "name", "val": "Alice"})
    spec = SpecificationFactory.from_json(payload, registry=registry)
    assert spec.is_satisfied_by(candidate) is True


def test_from_json_value_type_restores_uuid(registry):
    company = uuid4()
    entity = MockAggregate(id=uuid4(), name="x", age=1, company_id=company)
    payload = json.dumps(
        {"op": "=", "attr": "company_id", "val": str(company), "value_type": "uuid"}
    )
    spec = SpecificationFactory.from_json(payload, registry=registry)
    assert spec.is_satisfied_by(entity) is True


def test_from_json_invalid_json(registry):
    with pytest.raises(ValidationError, match="Invalid JSON"):
        SpecificationFactory.from_json("not json {", registry=registry)


def test_from_json_non_object(registry):
    with pytest.raises(ValidationError, match="object"):
        SpecificationFactory.from_json('"just a string"', registry=registry)


# -- from_dict with validation -----------------------------------------------


def test_from_dict_missing_op(registry):
    with pytest.raises(ValidationError, match="op"):
        SpecificationFactory.from_dict({}, registry=registry)


def test_from_dict_unknown_operator_suggests(registry):
    with pytest.raises(OperatorNotFoundError) as exc_info:
        SpecificationFactory.from_dict(
            {"op": "is_nul", "attr": "name"}, registry=registry
        )
    assert "is_null" in exc_info.value.suggestions
    assert exc_info.value.to_dict()["error"] == "OPERATOR_NOT_FOUND"


def test_from_dict_missing_attr(registry):
    with pytest.raises(ValidationError, match="attr"):
        SpecificationFactory.from_dict({"op": "=", "val": 1}, registry=registry)


def test_from_dict_logical_requires_conditions(registry):
    with pytest.raises(ValidationError, match="conditions"):
        SpecificationFactory.from_dict({"op": "and"}, registry=registry)


def test_from_dict_not_takes_one_condition(registry):
    leaf = {"op": "=", "attr": "name", "val": "x"}
    with pytest.raises(ValidationError, match="exactly one"):
        SpecificationFactory.from_dict(
            {"op": "not", "conditions": [leaf, leaf]}, registry=registry
        )


def test_from_dict_allowed_fields(registry):
    with pytest.raises(ValidationError, match="allowed"):
        SpecificationFactory.from_dict(
            {"op": "=", "attr": "secret", "val": 1},
            allowed_fields=["name"],
            registry=registry,
        )


def test_from_dict_nested_tree(candidate: MockAggregate, registry):
    spec = SpecificationFactory.from_dict(
        {
            "op": "or",
            "conditions": [
                {"op": "<", "attr": "age", "val": 18},
                {
                    "op": "not",
                    "conditions": [{"op": "=", "attr": "name", "val": "Bob"}],
                },
            ],
        },
        registry=registry,
    )
    assert spec.is_satisfied_by(candidate) is True


# -- validate ----------------------------------------------------------------


def test_validate_collects_all_errors():
    errors = SpecificationFactory.validate(
        {
            "op": "and",
            "conditions": [
                {"op": "bogus", "attr": "name"},
                {"op": "="},
                "not a dict",
            ],
        }
    )
    assert len(errors) == 3
    assert "unknown operator" in errors[0]
    assert "missing 'attr'" in errors[1]
    assert "expected dict" in errors[2]


def test_validate_valid_tree_returns_empty():
    assert SpecificationFactory.validate({"op": "is_null", "attr": "company_id"}) == []
