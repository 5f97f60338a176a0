"""IImageStorage — external blob store for image bytes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime


@runtime_checkable
class IImageStorage(Protocol):
    """
    Opaque object store keyed by string.

    Not transactional. ``delete`` is idempotent: removing a key that does
    not exist succeeds, so compensation and reconciliation may race.
    """

    async def upload(self, content: bytes, key: str, content_type: str) -> None:
        """Store *content* under *key*, replacing any existing object.

        Raises:
            ImageUploadError: The object could not be written.
        """
        ...

    async def delete(self, key: str) -> None:
        """Remove the object under *key*; no-op if absent.

        Raises:
            ImageDeletionError: The object exists but could not be removed.
        """
        ...

    async def exists(self, key: str) -> bool: ...

    async def list_keys(self, *, stored_before: datetime) -> list[str]:
        """Keys of complete objects written before *stored_before*.

        Reconciliation uses this to find objects that no record describes.
        """
        ...
