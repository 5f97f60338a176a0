"""Image metadata record.

The bytes live in external storage under :attr:`Image.storage_key`; this
record only describes them. Record and object can briefly disagree (a
record whose object was never written, an object whose record was rolled
back). Reconciliation and compensation repair that.
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import TYPE_CHECKING
from uuid import UUID

from riber_core.domain.aggregate import AggregateRoot
from riber_core.domain.mixins import AuditableMixin, SoftDeleteMixin
from riber_core.primitives.id_generator import UUID4Generator

from ..exceptions import InvalidImageError
from .content_type import ContentType

if TYPE_CHECKING:
    from riber_core.primitives.id_generator import IIDGenerator


class Image(AggregateRoot[UUID], AuditableMixin, SoftDeleteMixin):
    length: int
    original_name: str
    extension: str
    content_type: ContentType
    should_delete: bool = False
    marked_for_deletion_at: datetime | None = None

    @classmethod
    def create(
        cls,
        length: int,
        original_name: str,
        content_type: str,
        *,
        id_generator: IIDGenerator | None = None,
    ) -> Image:
        """Describe a new upload.

        Raises:
            InvalidImageError: non-positive length, blank name, or a name
                without an extension.
            InvalidContentTypeError: content type is not an allowed image type.
        """
        if length <= 0:
            raise InvalidImageError("Image length must be greater than zero")
        if not original_name or not original_name.strip():
            raise InvalidImageError("Image name cannot be empty")

        extension = os.path.splitext(original_name)[1]
        if extension in ("", "."):
            raise InvalidImageError("Image name must have an extension")

        return cls(
            id_generator=id_generator or UUID4Generator(),
            length=length,
            original_name=original_name,
            extension=extension,
            content_type=ContentType.create(content_type),
        )

    @property
    def storage_key(self) -> str:
        """Object key in external storage: ``"{id}{extension}"``."""
        return f"{self.id}{self.extension}"

    @staticmethod
    def id_from_storage_key(key: str) -> UUID | None:
        """The id *key* was built from, or ``None`` if no image owns such a key."""
        try:
            return UUID(os.path.splitext(key)[0])
        except ValueError:
            return None

    def mark_for_deletion(self) -> None:
        self.should_delete = True
        self.marked_for_deletion_at = datetime.now(timezone.utc)
        self.touch()

    @property
    def is_marked_for_deletion(self) -> bool:
        return self.should_delete and self.marked_for_deletion_at is not None

    def __str__(self) -> str:
        return self.storage_key
