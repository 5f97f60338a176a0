"""Product creation command and its validator."""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from riber_core.cqrs.command import Command
from riber_core.primitives.id_generator import is_nil
from riber_core.validation.result import ValidationResult

from ..domain.content_type import ALLOWED_IMAGE_TYPES, is_valid_image_type

MAX_NAME_LENGTH = 255
MAX_DESCRIPTION_LENGTH = 255


class ImageAttachment(BaseModel):
    """Binary image submitted with a creation request."""

    model_config = ConfigDict(frozen=True)

    content: bytes
    file_name: str
    content_type: str

    @property
    def length(self) -> int:
        return len(self.content)


class CreateProductCommand(Command[UUID]):
    name: str
    description: str
    price: Decimal
    category_id: UUID
    image: ImageAttachment | None = None


class CreateProductCommandValidator:
    """Field checks run before any transaction is opened."""

    async def validate(self, command: CreateProductCommand) -> ValidationResult:
        result = ValidationResult.success()

        if not command.name or not command.name.strip():
            result.add_error("name", "Name is required")
        elif len(command.name) > MAX_NAME_LENGTH:
            result.add_error("name", f"Name must be at most {MAX_NAME_LENGTH} characters")

        if not command.description or not command.description.strip():
            result.add_error("description", "Description is required")
        elif len(command.description) > MAX_DESCRIPTION_LENGTH:
            result.add_error(
                "description",
                f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters",
            )

        if command.price <= 0:
            result.add_error("price", "Price must be greater than zero")

        if is_nil(command.category_id):
            result.add_error("category_id", "Category is required")

        if command.image is not None:
            if not command.image.file_name.strip():
                result.add_error("image.file_name", "Image name is required")
            if command.image.length == 0:
                result.add_error("image.content", "Image cannot be empty")
            if not is_valid_image_type(command.image.content_type):
                allowed = ", ".join(sorted(ALLOWED_IMAGE_TYPES))
                result.add_error(
                    "image.content_type", f"Content type must be one of: {allowed}"
                )

        return result
