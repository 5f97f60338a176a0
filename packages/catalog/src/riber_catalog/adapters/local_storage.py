"""LocalImageStorage — ``IImageStorage`` backed by a local directory."""

from __future__ import annotations

import contextlib
import logging
import stat
import uuid
from pathlib import Path
from typing import TYPE_CHECKING

import aiofiles
import aiofiles.os

from riber_core.primitives.exceptions import StorageError

from ..exceptions import ImageDeletionError, ImageUploadError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

logger = logging.getLogger("riber.storage.local")

_PARTIAL_PREFIX = "."
_PARTIAL_SUFFIX = ".partial"


class LocalImageStorage:
    """Stores each object as one file ``<root>/<key>``.

    Keys must be plain file names; anything that would resolve outside
    *root* is rejected with :class:`StorageError`, as are keys starting
    with a dot, which are reserved for in-progress writes.

    Uploads are written to ``.<key>.<random>.partial`` and renamed into
    place, so a reader never sees a truncated object under its key and a
    failed or cancelled upload leaves nothing behind.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path_for(self, key: str) -> Path:
        if not key or not key.strip():
            raise StorageError("Storage key cannot be empty", key=key)
        if key.startswith(_PARTIAL_PREFIX):
            raise StorageError(f"Invalid storage key {key!r}", key=key)
        path = (self.root / key).resolve()
        if path.parent != self.root.resolve():
            raise StorageError(f"Invalid storage key {key!r}", key=key)
        return path

    async def upload(self, content: bytes, key: str, content_type: str) -> None:
        path = self._path_for(key)
        partial = path.with_name(
            f"{_PARTIAL_PREFIX}{key}.{uuid.uuid4().hex}{_PARTIAL_SUFFIX}"
        )
        try:
            async with aiofiles.open(partial, mode="wb") as f:
                await f.write(content)
            await aiofiles.os.replace(partial, path)
        except OSError as exc:
            logger.error("Upload of %s (%s) failed: %s", key, content_type, exc)
            raise ImageUploadError(f"Could not write {key}", key=key) from exc
        finally:
            with contextlib.suppress(FileNotFoundError):
                await aiofiles.os.remove(partial)
        logger.debug("Stored %s (%d bytes, %s)", key, len(content), content_type)

    async def open(self, key: str) -> bytes:
        path = self._path_for(key)
        try:
            async with aiofiles.open(path, mode="rb") as f:
                return await f.read()
        except FileNotFoundError as exc:
            raise StorageError(f"No stored object {key}", key=key) from exc

    async def delete(self, key: str) -> None:
        path = self._path_for(key)
        try:
            await aiofiles.os.remove(path)
        except FileNotFoundError:
            logger.debug("Stored object %s already absent", key)
        except OSError as exc:
            raise ImageDeletionError(f"Could not delete {key}", key=key) from exc

    async def exists(self, key: str) -> bool:
        return bool(await aiofiles.os.path.isfile(self._path_for(key)))

    async def list_keys(self, *, stored_before: datetime) -> list[str]:
        """Keys of objects last written before *stored_before*, sorted.

        In-progress writes are never listed.
        """
        cutoff = stored_before.timestamp()
        keys: list[str] = []
        for name in await aiofiles.os.listdir(self.root):
            if name.startswith(_PARTIAL_PREFIX):
                continue
            try:
                info = await aiofiles.os.stat(self.root / name)
            except FileNotFoundError:
                continue
            if stat.S_ISREG(info.st_mode) and info.st_mtime < cutoff:
                keys.append(name)
        return sorted(keys)

    async def delete_all(self, keys: Iterable[str]) -> list[str]:
        """Delete every key that is present; return the keys actually removed.

        Missing keys are skipped. A key that fails to delete is logged and
        skipped as well.
        """
        deleted: list[str] = []
        for key in keys:
            try:
                if not await self.exists(key):
                    continue
                await self.delete(key)
            except StorageError as exc:
                logger.error("Bulk delete skipped %s: %s", key, exc)
                continue
            deleted.append(key)
        return deleted
