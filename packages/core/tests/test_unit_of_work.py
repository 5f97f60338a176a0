from typing import NoReturn

import pytest

from riber_core.adapters.memory.unit_of_work import InMemoryUnitOfWork


@pytest.mark.asyncio()
async def test_uow_context_manager_begins_and_commits() -> None:
    uow = InMemoryUnitOfWork()

    async with uow:
        await uow.save_changes()

    assert uow.began
    assert uow.committed
    assert uow.commit_count == 1
    assert uow.save_count == 1
    assert not uow.rolled_back


@pytest.mark.asyncio()
async def test_uow_context_manager_rollback_on_error() -> NoReturn:
    uow = InMemoryUnitOfWork()

    with pytest.raises(ValueError, match="oops"):
        async with uow:
            raise ValueError("oops")

    assert not uow.committed
    assert uow.rolled_back
    assert uow.rollback_count == 1


@pytest.mark.asyncio()
async def test_uow_manual_rollback_blocks_later_commit() -> None:
    uow = InMemoryUnitOfWork()

    async with uow:
        await uow.rollback()

    assert uow.rolled_back
    assert not uow.committed
    assert uow.commit_count == 0


@pytest.mark.asyncio()
async def test_uow_configured_commit_failure() -> None:
    uow = InMemoryUnitOfWork()
    uow.fail_on_commit = RuntimeError("db down")

    await uow.begin_transaction()
    with pytest.raises(RuntimeError, match="db down"):
        await uow.commit()
    await uow.rollback()

    assert not uow.committed
    assert uow.rolled_back


def test_uow_reset() -> None:
    uow = InMemoryUnitOfWork()
    uow.committed = True
    uow.rolled_back = True
    uow.commit_count = 5
    uow.fail_on_save = RuntimeError()

    uow.reset()

    assert not uow.committed
    assert not uow.rolled_back
    assert uow.commit_count == 0
    assert uow.fail_on_save is None
