"""InMemoryImageStorage — dict-backed ``IImageStorage`` fake."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from ...exceptions import ImageDeletionError

if TYPE_CHECKING:
    from collections.abc import Callable


class InMemoryImageStorage:
    """Keeps objects in a dict and records every call.

    ``fail_on_upload`` makes uploads raise; keys in ``failing_deletes``
    make ``delete`` raise :class:`ImageDeletionError` for that key.
    Upload times come from *clock*, so tests can age objects.
    """

    def __init__(self, *, clock: Callable[[], datetime] | None = None) -> None:
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.stored_at: dict[str, datetime] = {}
        self.uploads: list[str] = []
        self.deletes: list[str] = []
        self.fail_on_upload: BaseException | None = None
        self.failing_deletes: set[str] = set()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def upload(self, content: bytes, key: str, content_type: str) -> None:
        self.uploads.append(key)
        if self.fail_on_upload is not None:
            raise self.fail_on_upload
        self.objects[key] = (content, content_type)
        self.stored_at[key] = self._clock()

    async def delete(self, key: str) -> None:
        self.deletes.append(key)
        if key in self.failing_deletes:
            raise ImageDeletionError(f"Could not delete {key}", key=key)
        self.objects.pop(key, None)
        self.stored_at.pop(key, None)

    async def exists(self, key: str) -> bool:
        return key in self.objects

    async def list_keys(self, *, stored_before: datetime) -> list[str]:
        return sorted(key for key, at in self.stored_at.items() if at < stored_before)
