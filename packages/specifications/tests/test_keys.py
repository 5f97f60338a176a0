from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4

from riber_core.primitives.id_generator import NIL_UUID
from riber_specifications import KeySpecification, empty_key_for


@dataclass
class Item:
    id: UUID
    code: str | None


def test_key_comparison_is_exact():
    item = Item(uuid4(), "ABC")
    assert KeySpecification("code", "ABC").is_satisfied_by(item)
    assert not KeySpecification("code", "abc").is_satisfied_by(item)
    assert not KeySpecification("code", " ABC").is_satisfied_by(item)


def test_empty_keys_never_match_even_empty_values():
    assert not KeySpecification("code", "").is_satisfied_by(Item(uuid4(), ""))
    assert not KeySpecification("id", NIL_UUID).is_satisfied_by(Item(NIL_UUID, None))
    assert not KeySpecification("code", None).is_satisfied_by(Item(uuid4(), None))


def test_empty_key_for_types():
    assert empty_key_for(uuid4()) == NIL_UUID
    assert empty_key_for("x") == ""
    assert empty_key_for(5) is None


def test_key_dict_form_carries_guard():
    key = uuid4()
    assert KeySpecification("id", key).to_dict() == {
        "op": "and",
        "conditions": [
            {"op": "=", "attr": "id", "val": key},
            {"op": "!=", "attr": "id", "val": NIL_UUID},
            {"op": "is_not_null", "attr": "id"},
        ],
    }
