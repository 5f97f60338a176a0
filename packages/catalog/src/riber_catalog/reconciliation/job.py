"""ImageReconciliationJob — removes stored objects nothing should point at."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, cast

from riber_core.correlation import get_correlation_id
from riber_core.instrumentation import get_hook_registry

from ..config import CatalogSettings
from ..domain.image import Image
from ..domain.specifications import ImageIdInSpecification

if TYPE_CHECKING:
    from collections.abc import Callable
    from uuid import UUID

    from ..ports.repository import CatalogRepositoryScope
    from ..ports.storage import IImageStorage

logger = logging.getLogger("riber.reconciliation")


@dataclass(frozen=True)
class ReconciliationSummary:
    """Counts of one sweep; ``stray`` is the part of ``attempted`` that had no record."""

    attempted: int = 0
    succeeded: int = 0
    failed: int = 0
    failed_keys: tuple[str, ...] = field(default_factory=tuple)
    stray: int = 0


class ImageReconciliationJob:
    """One sweep over the repository's cleanup candidates and stray objects.

    Candidates come from ``list_unreferenced_images``. Stray objects are
    stored objects older than *grace_period* whose key names an image id
    with no record at all, which is what a rolled-back provisioning leaves
    behind when its compensation never ran. Keys that no image could have
    produced are left alone.

    Each object is deleted independently; a failing delete is logged with
    its key and counted, and the sweep moves on. Records are left in
    place, so a later sweep retries whatever failed. Deleting an object
    that is already gone counts as success.

    Every sweep opens its own repository scopes through *repositories*
    and holds none of them while talking to storage.

    The job knows nothing about scheduling; see
    :class:`~riber_catalog.reconciliation.worker.ImageReconciliationWorker`.
    """

    def __init__(
        self,
        repositories: CatalogRepositoryScope,
        storage: IImageStorage,
        *,
        grace_period: timedelta | None = None,
        clock: Callable[[], datetime] | None = None,
        batch_size: int | None = None,
        settings: CatalogSettings | None = None,
    ) -> None:
        settings = settings or CatalogSettings()
        self._repositories = repositories
        self._storage = storage
        self._grace_period = (
            settings.orphan_grace_period if grace_period is None else grace_period
        )
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._batch_size = batch_size or settings.reconciliation_batch_size

    async def run(self) -> ReconciliationSummary:
        return cast(
            "ReconciliationSummary",
            await get_hook_registry().execute_all(
                "reconciliation.sweep",
                {"correlation_id": get_correlation_id()},
                self._sweep,
            ),
        )

    async def _sweep(self) -> ReconciliationSummary:
        async with self._repositories() as repository:
            images = await repository.list_unreferenced_images()
        candidate_keys = [image.storage_key for image in images]
        stray_keys = await self._stray_keys()

        failed_keys: list[str] = []
        for key in [*candidate_keys, *stray_keys]:
            try:
                await self._storage.delete(key)
            except Exception as exc:
                failed_keys.append(key)
                logger.error("Failed to delete stored image %s: %s", key, exc)
                continue
            logger.debug("Deleted stored image %s", key)

        attempted = len(candidate_keys) + len(stray_keys)
        summary = ReconciliationSummary(
            attempted=attempted,
            succeeded=attempted - len(failed_keys),
            failed=len(failed_keys),
            failed_keys=tuple(failed_keys),
            stray=len(stray_keys),
        )
        if summary.attempted:
            logger.info(
                "Reconciliation sweep: %d attempted (%d stray), %d deleted, %d failed",
                summary.attempted,
                summary.stray,
                summary.succeeded,
                summary.failed,
            )
        return summary

    async def _stray_keys(self) -> list[str]:
        cutoff = self._clock() - self._grace_period
        by_id: dict[UUID, str] = {}
        for key in await self._storage.list_keys(stored_before=cutoff):
            image_id = Image.id_from_storage_key(key)
            if image_id is None:
                logger.debug("Skipping foreign stored object %s", key)
                continue
            by_id[image_id] = key

        ids = list(by_id)
        stray: list[str] = []
        for start in range(0, len(ids), self._batch_size):
            batch = ids[start : start + self._batch_size]
            async with self._repositories() as repository:
                known = await repository.find_images(ImageIdInSpecification(batch))
            recorded = {image.id for image in known}
            stray.extend(by_id[image_id] for image_id in batch if image_id not in recorded)
        return stray
