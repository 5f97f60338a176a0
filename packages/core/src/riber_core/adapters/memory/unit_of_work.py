"""InMemoryUnitOfWork — tracks transaction calls for unit tests."""

from __future__ import annotations

from ...ports.unit_of_work import UnitOfWork


class InMemoryUnitOfWork(UnitOfWork):
    """In-memory implementation of UnitOfWork for testing.

    Records begin/save/commit/rollback calls for assertions. Once the
    transaction has been committed or rolled back, further commit/rollback
    calls are ignored.

    ``fail_on_commit`` / ``fail_on_save`` make the next call raise the given
    exception, so failure paths can be exercised without a database.
    """

    def __init__(self) -> None:
        super().__init__()
        self.began: bool = False
        self.committed: bool = False
        self.rolled_back: bool = False
        self.begin_count: int = 0
        self.save_count: int = 0
        self.commit_count: int = 0
        self.rollback_count: int = 0
        self.fail_on_commit: BaseException | None = None
        self.fail_on_save: BaseException | None = None

    async def begin_transaction(self) -> None:
        self.began = True
        self.begin_count += 1

    async def save_changes(self) -> None:
        self.save_count += 1
        if self.fail_on_save is not None:
            raise self.fail_on_save

    async def commit(self) -> None:
        """Record that commit was called."""
        if self.committed or self.rolled_back:
            return
        if self.fail_on_commit is not None:
            raise self.fail_on_commit
        self.committed = True
        self.commit_count += 1

    async def rollback(self) -> None:
        """Record that rollback was called."""
        if self.committed or self.rolled_back:
            return
        self.rolled_back = True
        self.rollback_count += 1

    # ── Test helpers ─────────────────────────────────────────────

    def reset(self) -> None:
        """Reset call tracking (for test setup)."""
        self.began = False
        self.committed = False
        self.rolled_back = False
        self.begin_count = 0
        self.save_count = 0
        self.commit_count = 0
        self.rollback_count = 0
        self.fail_on_commit = None
        self.fail_on_save = None
