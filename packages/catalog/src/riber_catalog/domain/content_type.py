"""Content type of a stored image."""

from __future__ import annotations

from pydantic import field_validator

from riber_core.domain.value_object import ValueObject

from ..exceptions import InvalidContentTypeError

ALLOWED_IMAGE_TYPES: frozenset[str] = frozenset(
    {"image/png", "image/jpg", "image/jpeg", "image/webp"}
)


def is_valid_image_type(content_type: str | None) -> bool:
    """Case-insensitive membership test against the allowed image types."""
    return bool(content_type) and content_type.lower() in ALLOWED_IMAGE_TYPES  # type: ignore[union-attr]


class ContentType(ValueObject):
    """An allowed image MIME type, kept as the caller spelled it."""

    value: str

    @field_validator("value")
    @classmethod
    def _allowed(cls, value: str) -> str:
        if not is_valid_image_type(value):
            raise InvalidContentTypeError(f"Content type {value!r} is not allowed")
        return value

    @classmethod
    def create(cls, value: str) -> ContentType:
        return cls(value=value)

    def __str__(self) -> str:
        return self.value
