"""Tests for ImageReconciliationJob and ImageReconciliationWorker."""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import AsyncMock

import pytest

from riber_catalog.adapters.memory import InMemoryCatalogRepository, InMemoryImageStorage
from riber_catalog.config import CatalogSettings
from riber_catalog.domain import Image, Product
from riber_catalog.reconciliation import (
    ImageReconciliationJob,
    ImageReconciliationWorker,
    ReconciliationSummary,
)
from riber_core.instrumentation import HookRegistry, set_hook_registry
from riber_core.primitives.exceptions import PersistenceError

NOW = datetime(2026, 1, 10, 12, 0, tzinfo=timezone.utc)
LATER = NOW + timedelta(days=2)


def _image(*, age: timedelta = timedelta(days=3), name: str = "photo.png") -> Image:
    image = Image.create(10, name, "image/png")
    image.created_at = NOW - age
    return image


@pytest.fixture
def repository() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository(grace_period=timedelta(hours=24), clock=lambda: NOW)


@pytest.fixture
def storage() -> InMemoryImageStorage:
    return InMemoryImageStorage(clock=lambda: NOW)


async def _stored(storage: InMemoryImageStorage, *images: Image) -> None:
    for image in images:
        await storage.upload(b"bytes", image.storage_key, "image/png")


def _job(
    repository: InMemoryCatalogRepository, storage: InMemoryImageStorage, **options: Any
) -> ImageReconciliationJob:
    options.setdefault("clock", lambda: NOW)
    return ImageReconciliationJob(repository.scope, storage, **options)


# ============================================================================
# Candidate selection
# ============================================================================


class TestCandidates:
    @pytest.mark.asyncio()
    async def test_old_unreferenced_images_are_candidates(self, repository) -> None:
        orphan = _image()
        repository.seed(orphan)

        assert await repository.list_unreferenced_images() == [orphan]

    @pytest.mark.asyncio()
    async def test_images_inside_grace_period_are_skipped(self, repository) -> None:
        repository.seed(_image(age=timedelta(hours=1)))

        assert await repository.list_unreferenced_images() == []

    @pytest.mark.asyncio()
    async def test_referenced_images_are_skipped(self, repository) -> None:
        image = _image()
        product = Product.create(
            "Tea", "Green", "5", uuid.uuid4(), uuid.uuid4(), image.id
        )
        repository.seed(image, product)

        assert await repository.list_unreferenced_images() == []

    @pytest.mark.asyncio()
    async def test_marked_images_are_candidates_even_when_referenced(
        self, repository
    ) -> None:
        image = _image(age=timedelta(minutes=5))
        image.mark_for_deletion()
        product = Product.create(
            "Tea", "Green", "5", uuid.uuid4(), uuid.uuid4(), image.id
        )
        repository.seed(image, product)

        assert await repository.list_unreferenced_images() == [image]

    @pytest.mark.asyncio()
    async def test_soft_deleted_images_are_skipped(self, repository) -> None:
        image = _image()
        image.mark_for_deletion()
        image.delete_entity()
        repository.seed(image)

        assert await repository.list_unreferenced_images() == []


# ============================================================================
# Sweep
# ============================================================================


class TestImageReconciliationJob:
    @pytest.mark.asyncio()
    async def test_deletes_every_candidate(self, repository, storage) -> None:
        images = [_image(name=f"p{i}.png") for i in range(3)]
        repository.seed(*images)
        await _stored(storage, *images)

        summary = await _job(repository, storage).run()

        assert summary == ReconciliationSummary(attempted=3, succeeded=3, failed=0)
        assert storage.objects == {}

    @pytest.mark.asyncio()
    async def test_records_are_never_removed(self, repository, storage) -> None:
        image = _image()
        repository.seed(image)

        await _job(repository, storage).run()

        assert image.id in repository.images

    @pytest.mark.asyncio()
    async def test_second_run_over_deleted_keys_does_not_fail(
        self, repository, storage
    ) -> None:
        images = [_image(name=f"p{i}.png") for i in range(2)]
        repository.seed(*images)
        await _stored(storage, *images)
        job = _job(repository, storage)

        first = await job.run()
        second = await job.run()

        assert first.failed == 0
        assert second.attempted == 2
        assert second.failed == 0
        assert second.succeeded == 2

    @pytest.mark.asyncio()
    async def test_one_failing_delete_does_not_stop_the_sweep(
        self, repository, storage, caplog
    ) -> None:
        images = [_image(name=f"p{i}.png") for i in range(4)]
        repository.seed(*images)
        await _stored(storage, *images)
        broken = images[1].storage_key
        storage.failing_deletes.add(broken)

        summary = await _job(repository, storage).run()

        assert len(storage.deletes) == 4
        assert summary.attempted == 4
        assert summary.succeeded == 3
        assert summary.failed == 1
        assert summary.failed_keys == (broken,)
        assert broken in caplog.text

    @pytest.mark.asyncio()
    async def test_no_candidates_is_an_empty_summary(self, repository, storage) -> None:
        summary = await _job(repository, storage).run()

        assert summary == ReconciliationSummary()
        assert storage.deletes == []

    @pytest.mark.asyncio()
    async def test_sweep_runs_through_hook(self, repository, storage) -> None:
        operations: list[str] = []

        async def hook(operation: str, attributes: dict[str, Any], next_handler: Any) -> Any:
            operations.append(operation)
            return await next_handler()

        registry = HookRegistry()
        registry.register(hook)
        set_hook_registry(registry)

        summary = await _job(repository, storage).run()

        assert operations == ["reconciliation.sweep"]
        assert isinstance(summary, ReconciliationSummary)



# ============================================================================
# Sweep scopes
# ============================================================================


class TestSweepScopes:
    @pytest.mark.asyncio()
    async def test_storage_is_never_called_inside_a_repository_scope(
        self, repository, storage
    ) -> None:
        images = [_image(name=f"p{i}.png") for i in range(2)]
        repository.seed(*images)
        await _stored(storage, *images)
        await _stored(storage, _image(name="stray.png"))
        open_scopes = 0

        @asynccontextmanager
        async def scope() -> AsyncIterator[InMemoryCatalogRepository]:
            nonlocal open_scopes
            open_scopes += 1
            try:
                yield repository
            finally:
                open_scopes -= 1

        scopes_during_delete: list[int] = []
        delete = storage.delete

        async def tracking_delete(key: str) -> None:
            scopes_during_delete.append(open_scopes)
            await delete(key)

        storage.delete = tracking_delete  # type: ignore[method-assign]

        summary = await ImageReconciliationJob(scope, storage, clock=lambda: LATER).run()

        assert summary.succeeded == 3
        assert scopes_during_delete == [0, 0, 0]
        assert open_scopes == 0

    @pytest.mark.asyncio()
    async def test_each_run_opens_its_own_scope(self, repository, storage) -> None:
        job = _job(repository, storage)

        await job.run()
        await job.run()

        assert repository.scopes_opened == 2


# ============================================================================
# Stray objects
# ============================================================================


class TestStrayObjects:
    @pytest.mark.asyncio()
    async def test_object_without_record_is_deleted_after_grace(
        self, repository, storage
    ) -> None:
        stray = _image()
        await _stored(storage, stray)

        summary = await _job(repository, storage, clock=lambda: LATER).run()

        assert summary == ReconciliationSummary(attempted=1, succeeded=1, stray=1)
        assert storage.objects == {}

    @pytest.mark.asyncio()
    async def test_fresh_object_without_record_is_kept(self, repository, storage) -> None:
        await _stored(storage, _image())

        summary = await _job(
            repository, storage, clock=lambda: NOW + timedelta(hours=1)
        ).run()

        assert summary == ReconciliationSummary()
        assert len(storage.objects) == 1

    @pytest.mark.asyncio()
    async def test_keys_no_image_could_own_are_kept(self, repository, storage) -> None:
        await storage.upload(b"x", "logo.png", "image/png")
        await storage.upload(b"x", "README", "text/plain")

        summary = await _job(repository, storage, clock=lambda: LATER).run()

        assert summary.attempted == 0
        assert set(storage.objects) == {"logo.png", "README"}

    @pytest.mark.asyncio()
    async def test_objects_with_any_record_are_kept(self, repository, storage) -> None:
        referenced = _image(name="a.png")
        product = Product.create(
            "Tea", "Green", "5", uuid.uuid4(), uuid.uuid4(), referenced.id
        )
        soft_deleted = _image(name="b.png")
        soft_deleted.delete_entity()
        repository.seed(referenced, product, soft_deleted)
        await _stored(storage, referenced, soft_deleted)

        summary = await _job(repository, storage, clock=lambda: LATER).run()

        assert summary == ReconciliationSummary()
        assert set(storage.objects) == {
            referenced.storage_key,
            soft_deleted.storage_key,
        }

    @pytest.mark.asyncio()
    async def test_keys_are_checked_in_batches(self, repository, storage) -> None:
        strays = [_image(name=f"s{i}.png") for i in range(5)]
        await _stored(storage, *strays)

        summary = await _job(
            repository, storage, clock=lambda: LATER, batch_size=2
        ).run()

        assert summary.stray == 5
        assert storage.objects == {}
        assert repository.scopes_opened == 1 + 3

    @pytest.mark.asyncio()
    async def test_failing_stray_delete_is_counted(self, repository, storage) -> None:
        stray = _image()
        await _stored(storage, stray)
        storage.failing_deletes.add(stray.storage_key)

        summary = await _job(repository, storage, clock=lambda: LATER).run()

        assert summary.stray == 1
        assert summary.failed_keys == (stray.storage_key,)
        assert summary.succeeded == 0

    @pytest.mark.asyncio()
    async def test_upload_left_by_failed_compensation_is_swept(
        self, saga, make_command, repository, storage, publisher
    ) -> None:
        repository.fail_on_create_product = PersistenceError("insert failed")
        publisher.fail_with = RuntimeError("broker unavailable")

        with pytest.raises(PersistenceError):
            await saga.execute(make_command(with_image=True))

        key = storage.uploads[0]
        assert publisher.events == []
        assert repository.images == {}
        assert await storage.exists(key)

        summary = await _job(repository, storage, clock=lambda: LATER).run()

        assert summary.stray == 1
        assert not await storage.exists(key)

# ============================================================================
# Worker
# ============================================================================


class TestImageReconciliationWorker:
    @pytest.mark.asyncio()
    async def test_run_once_delegates_to_job(self) -> None:
        job = AsyncMock()
        job.run.return_value = ReconciliationSummary(attempted=1, succeeded=1)
        worker = ImageReconciliationWorker(job, poll_interval=60)

        summary = await worker.run_once()

        assert summary.succeeded == 1
        job.run.assert_awaited_once()

    @pytest.mark.asyncio()
    async def test_trigger_wakes_the_loop(self) -> None:
        ran = asyncio.Event()
        job = AsyncMock()

        async def run() -> ReconciliationSummary:
            ran.set()
            return ReconciliationSummary()

        job.run.side_effect = run
        worker = ImageReconciliationWorker(job, poll_interval=3600)

        await worker.start()
        try:
            worker.trigger()
            await asyncio.wait_for(ran.wait(), timeout=1.0)
        finally:
            await worker.stop()

        assert not worker.is_running
        assert job.run.await_count >= 1

    @pytest.mark.asyncio()
    async def test_loop_survives_a_failing_sweep(self) -> None:
        calls = 0
        second = asyncio.Event()
        job = AsyncMock()

        async def run() -> ReconciliationSummary:
            nonlocal calls
            calls += 1
            if calls == 1:
                raise RuntimeError("database unavailable")
            second.set()
            return ReconciliationSummary()

        job.run.side_effect = run
        worker = ImageReconciliationWorker(job, poll_interval=0.01)

        await worker.start()
        try:
            await asyncio.wait_for(second.wait(), timeout=1.0)
        finally:
            await worker.stop()

        assert calls >= 2

    @pytest.mark.asyncio()
    async def test_start_is_idempotent(self) -> None:
        worker = ImageReconciliationWorker(AsyncMock(), poll_interval=3600)

        await worker.start()
        first_task = worker._task
        await worker.start()

        assert worker._task is first_task
        await worker.stop()

    def test_poll_interval_comes_from_settings(self) -> None:
        settings = CatalogSettings(reconciliation_poll_interval=120)

        worker = ImageReconciliationWorker(AsyncMock(), settings=settings)

        assert worker._poll_interval == 120
