"""Tests for CreateProductCommandValidator."""

from __future__ import annotations

import uuid

import pytest

from riber_catalog.provisioning import (
    CreateProductCommand,
    CreateProductCommandValidator,
    ImageAttachment,
)
from riber_core.primitives.id_generator import NIL_UUID


def _command(**overrides: object) -> CreateProductCommand:
    data: dict[str, object] = {
        "name": "Espresso",
        "description": "Double shot",
        "price": "12.50",
        "category_id": uuid.uuid4(),
    }
    data.update(overrides)
    return CreateProductCommand(**data)  # type: ignore[arg-type]


@pytest.mark.asyncio()
async def test_valid_command_passes() -> None:
    image = ImageAttachment(content=b"x", file_name="a.webp", content_type="image/webp")

    result = await CreateProductCommandValidator().validate(_command(image=image))

    assert result.is_valid


@pytest.mark.asyncio()
@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"name": ""}, "name"),
        ({"name": "x" * 256}, "name"),
        ({"description": "  "}, "description"),
        ({"description": "x" * 256}, "description"),
        ({"price": "0"}, "price"),
        ({"price": "-1"}, "price"),
        ({"category_id": NIL_UUID}, "category_id"),
    ],
)
async def test_field_rules(overrides: dict[str, object], field: str) -> None:
    result = await CreateProductCommandValidator().validate(_command(**overrides))

    assert not result.is_valid
    assert field in result.errors


@pytest.mark.asyncio()
async def test_image_rules() -> None:
    image = ImageAttachment(content=b"", file_name=" ", content_type="image/gif")

    result = await CreateProductCommandValidator().validate(_command(image=image))

    assert set(result.errors) == {
        "image.file_name",
        "image.content",
        "image.content_type",
    }


def test_command_is_immutable() -> None:
    command = _command()

    with pytest.raises(Exception):
        command.name = "other"  # type: ignore[misc]
