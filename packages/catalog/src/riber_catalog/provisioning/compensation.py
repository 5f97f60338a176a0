"""Consumer of :class:`StoredImageDeletionRequested` events."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ..config import CatalogSettings
from ..domain.events import StoredImageDeletionRequested

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from riber_core.ports.event_dispatcher import IEventDispatcher

    from ..ports.storage import IImageStorage

logger = logging.getLogger("riber.compensation")


class DeleteStoredImageHandler:
    """Deletes the stored object named by the event.

    Retries ``max_attempts`` times with exponential backoff. A key that is
    still present after the last attempt is logged and left for the
    reconciliation sweep; the handler does not raise for it, so one bad
    object never fails the dispatch of other handlers.
    """

    def __init__(
        self,
        storage: IImageStorage,
        *,
        max_attempts: int = 3,
        backoff: float = 0.5,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._storage = storage
        self._max_attempts = max_attempts
        self._backoff = backoff
        self._sleep = sleep

    async def handle(self, event: StoredImageDeletionRequested) -> None:
        key = (event.key or "").strip()
        if not key:
            logger.warning(
                "Ignoring deletion request %s without a storage key", event.event_id
            )
            return

        for attempt in range(1, self._max_attempts + 1):
            try:
                await self._storage.delete(key)
            except Exception as exc:
                if attempt == self._max_attempts:
                    logger.error(
                        "Giving up deleting stored image %s after %d attempts: %s",
                        key,
                        attempt,
                        exc,
                    )
                    return
                delay = self._backoff * (2 ** (attempt - 1))
                logger.warning(
                    "Deleting stored image %s failed (attempt %d/%d), retrying in %.2fs",
                    key,
                    attempt,
                    self._max_attempts,
                    delay,
                )
                await self._sleep(delay)
            else:
                logger.info(
                    "Deleted stored image %s (reason: %s)", key, event.reason or "n/a"
                )
                return


def register_compensation(
    dispatcher: IEventDispatcher[StoredImageDeletionRequested],
    storage: IImageStorage,
    settings: CatalogSettings | None = None,
) -> DeleteStoredImageHandler:
    """Wire a :class:`DeleteStoredImageHandler` into *dispatcher*."""
    settings = settings or CatalogSettings()
    handler = DeleteStoredImageHandler(
        storage,
        max_attempts=settings.compensation_max_attempts,
        backoff=settings.compensation_backoff,
    )
    dispatcher.register(StoredImageDeletionRequested, handler)
    return handler
