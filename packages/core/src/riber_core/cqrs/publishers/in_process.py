"""InProcessEventPublisher — fire-and-continue delivery through an EventDispatcher."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from ...correlation import get_correlation_id
from ...domain.events import enrich_event_metadata
from ...tenancy import get_tenant_id

if TYPE_CHECKING:
    from ...domain.events import DomainEvent
    from ...ports.event_dispatcher import IEventDispatcher

logger = logging.getLogger("riber.events")


class InProcessEventPublisher:
    """Implements ``IEventPublisher`` on top of a local dispatcher.

    ``publish`` stamps the current correlation and tenant IDs on the event,
    schedules the dispatch as a tracked ``asyncio.Task`` and returns
    immediately. The caller never waits for, or fails because of, the
    consumers. Pending deliveries can be awaited with :meth:`drain`
    (shutdown, tests).
    """

    def __init__(self, dispatcher: IEventDispatcher[Any]) -> None:
        self._dispatcher = dispatcher
        self._tasks: set[asyncio.Task[None]] = set()

    async def publish(self, event: DomainEvent) -> None:
        tenant_id = get_tenant_id()
        event = enrich_event_metadata(
            event,
            correlation_id=get_correlation_id(),
            tenant_id=str(tenant_id) if tenant_id is not None else None,
        )
        task = asyncio.get_running_loop().create_task(
            self._dispatcher.dispatch([event]),
            name=f"publish:{type(event).__name__}:{event.event_id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._on_delivery_done)
        logger.debug(
            "Published %s (event_id=%s)", type(event).__name__, event.event_id
        )

    def _on_delivery_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning("Event delivery task %s was cancelled", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Event delivery task %s failed: %s",
                task.get_name(),
                exc,
                exc_info=exc,
            )

    @property
    def pending(self) -> int:
        """Number of deliveries still in flight."""
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for every in-flight delivery to finish.

        Delivery failures are already logged by the done callback and are
        not re-raised here.
        """
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
