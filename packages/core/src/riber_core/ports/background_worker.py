"""IBackgroundWorker — lifecycle of a long-running loop owned by the host."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IBackgroundWorker(Protocol):
    """Started once at host startup and stopped at shutdown.

    ``stop`` must be safe to call on a worker that never started.
    """

    @property
    def is_running(self) -> bool: ...

    async def start(self) -> None: ...

    async def stop(self) -> None: ...
