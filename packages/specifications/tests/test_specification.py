from uuid import UUID, uuid4

import pytest

from riber_core.domain.aggregate import AggregateRoot
from riber_specifications import (
    AndSpecification,
    AttributeSpecification,
    NotSpecification,
    OrSpecification,
    SpecificationOperator,
    resolve_field,
)
from riber_specifications.exceptions import OperatorNotFoundError
from riber_specifications.evaluator import MemoryOperatorRegistry


class Tag(AggregateRoot[UUID]):
    label: str


class MockAggregate(AggregateRoot[UUID]):
    name: str
    age: int
    status: str
    nickname: str | None = None
    tags: list[Tag] = []


@pytest.fixture
def candidate() -> MockAggregate:
    return MockAggregate(
        id=uuid4(),
        name="John Doe",
        age=30,
        status="active",
        tags=[Tag(id=uuid4(), label="a"), Tag(id=uuid4(), label="b")],
    )


def test_attribute_specification_eq(candidate: MockAggregate, registry):
    spec = AttributeSpecification(
        "name", SpecificationOperator.EQ, "John Doe", registry=registry
    )
    assert spec.is_satisfied_by(candidate) is True

    spec = AttributeSpecification("name", "=", "john doe", registry=registry)
    assert spec.is_satisfied_by(candidate) is False


def test_attribute_specification_string_ops(candidate: MockAggregate, registry):
    assert AttributeSpecification(
        "name", SpecificationOperator.CONTAINS, "Doe", registry=registry
    ).is_satisfied_by(candidate)
    assert AttributeSpecification(
        "name", SpecificationOperator.ICONTAINS, "doe", registry=registry
    ).is_satisfied_by(candidate)
    assert AttributeSpecification(
        "name", SpecificationOperator.STARTSWITH, "John", registry=registry
    ).is_satisfied_by(candidate)
    assert not AttributeSpecification(
        "nickname", SpecificationOperator.CONTAINS, "x", registry=registry
    ).is_satisfied_by(candidate)


def test_attribute_specification_between_and_sets(candidate: MockAggregate, registry):
    assert AttributeSpecification(
        "age", SpecificationOperator.BETWEEN, [25, 35], registry=registry
    ).is_satisfied_by(candidate)
    assert not AttributeSpecification(
        "age", SpecificationOperator.BETWEEN, [35, 45], registry=registry
    ).is_satisfied_by(candidate)
    assert AttributeSpecification(
        "status", SpecificationOperator.IN, ["active", "pending"], registry=registry
    ).is_satisfied_by(candidate)
    assert AttributeSpecification(
        "status", SpecificationOperator.NOT_IN, ["archived"], registry=registry
    ).is_satisfied_by(candidate)


def test_attribute_specification_null_checks(candidate: MockAggregate, registry):
    assert AttributeSpecification(
        "nickname", SpecificationOperator.IS_NULL, None, registry=registry
    ).is_satisfied_by(candidate)
    assert AttributeSpecification(
        "name", SpecificationOperator.IS_NOT_NULL, None, registry=registry
    ).is_satisfied_by(candidate)
    assert AttributeSpecification(
        "nickname", SpecificationOperator.IS_EMPTY, None, registry=registry
    ).is_satisfied_by(candidate)


def test_ordering_against_missing_value_is_false(candidate: MockAggregate, registry):
    spec = AttributeSpecification("nickname", ">", "a", registry=registry)
    assert spec.is_satisfied_by(candidate) is False


def test_combinators_build_new_nodes(candidate: MockAggregate, registry):
    adult = AttributeSpecification("age", ">=", 18, registry=registry)
    active = AttributeSpecification("status", "=", "active", registry=registry)

    both = adult & active
    either = adult | ~active
    negated = ~adult

    assert isinstance(both, AndSpecification)
    assert isinstance(either, OrSpecification)
    assert isinstance(negated, NotSpecification)
    assert both.is_satisfied_by(candidate)
    assert either.is_satisfied_by(candidate)
    assert not negated.is_satisfied_by(candidate)
    # operands are untouched
    assert adult.to_dict() == {"op": ">=", "attr": "age", "val": 18}


def test_same_junction_chains_are_flattened(candidate: MockAggregate, registry):
    adult = AttributeSpecification("age", ">=", 18, registry=registry)
    active = AttributeSpecification("status", "=", "active", registry=registry)
    named = AttributeSpecification("name", "=", "John Doe", registry=registry)

    chain = adult & active & named
    mixed = (adult | active) & named

    assert len(chain.specifications) == 3
    assert chain.to_dict()["conditions"] == [
        adult.to_dict(),
        active.to_dict(),
        named.to_dict(),
    ]
    assert len(mixed.specifications) == 2
    assert isinstance(mixed.specifications[0], OrSpecification)
    assert chain.is_satisfied_by(candidate)


def test_double_negation_unwraps(candidate: MockAggregate, registry):
    adult = AttributeSpecification("age", ">=", 18, registry=registry)

    assert ~~adult is adult


def test_empty_junction_is_rejected():
    with pytest.raises(ValueError, match="at least one"):
        AndSpecification()


def test_to_dict_shapes(registry):
    leaf = AttributeSpecification("name", "=", "x", registry=registry)
    tree = (leaf | leaf) & ~leaf

    assert tree.to_dict() == {
        "op": "and",
        "conditions": [
            {"op": "or", "conditions": [leaf.to_dict(), leaf.to_dict()]},
            {"op": "not", "conditions": [leaf.to_dict()]},
        ],
    }


def test_resolve_field_nested_and_lists(candidate: MockAggregate):
    assert resolve_field(candidate, "tags.label") == ["a", "b"]
    assert resolve_field({"price": {"amount": 3}}, "price.amount") == 3
    assert resolve_field(candidate, "missing.path") is None


def test_unregistered_operator_raises(candidate: MockAggregate):
    spec = AttributeSpecification("name", "=", "x", registry=MemoryOperatorRegistry())
    with pytest.raises(OperatorNotFoundError):
        spec.is_satisfied_by(candidate)
