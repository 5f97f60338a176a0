"""EventDispatcher — runs the local handlers of domain events."""

from __future__ import annotations

import asyncio
import logging
from inspect import isawaitable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ..correlation import get_correlation_id
from ..domain.events import DomainEvent
from ..instrumentation import get_hook_registry

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..ports.event_dispatcher import EventHandler

logger = logging.getLogger("riber.events")

E = TypeVar("E", bound=DomainEvent)


def _as_callable(handler: EventHandler) -> Callable[[Any], Awaitable[None] | None]:
    handle = getattr(handler, "handle", None)
    if callable(handle):
        return handle
    if callable(handler):
        return handler
    raise TypeError(f"{handler!r} is neither callable nor has a handle() method")


class EventDispatcher(Generic[E]):
    """Routes events by exact type to handler instances.

    Events of one ``dispatch`` call are delivered in order; the handlers
    of a single event run concurrently. A handler failure is logged and
    re-raised to the caller once the other handlers of that event finish.
    Each event goes through the ``event.dispatch.<EventType>`` hook.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[DomainEvent], list[EventHandler]] = {}

    def register(self, event_type: type[E], handler: EventHandler) -> None:
        """Add *handler* for *event_type*; registering the same handler twice is a no-op."""
        _as_callable(handler)
        handlers = self._handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)

    def handlers_for(self, event_type: type[DomainEvent]) -> list[EventHandler]:
        return list(self._handlers.get(event_type, ()))

    async def dispatch(self, events: list[DomainEvent]) -> None:
        hooks = get_hook_registry()
        for event in events:
            handlers = self.handlers_for(type(event))
            if not handlers:
                logger.debug("No handlers registered for %s", type(event).__name__)
                continue
            await hooks.execute_all(
                f"event.dispatch.{type(event).__name__}",
                {
                    "event.type": type(event).__name__,
                    "event.id": event.event_id,
                    "correlation_id": event.correlation_id or get_correlation_id(),
                },
                lambda event=event, handlers=handlers: self._deliver(event, handlers),
            )

    async def _deliver(self, event: DomainEvent, handlers: list[EventHandler]) -> None:
        results = await asyncio.gather(
            *(self._invoke(handler, event) for handler in handlers),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result

    async def _invoke(self, handler: EventHandler, event: DomainEvent) -> None:
        try:
            result = _as_callable(handler)(event)
            if isawaitable(result):
                await result
        except Exception:
            logger.exception(
                "Handler %s failed for %s %s",
                getattr(handler, "__name__", type(handler).__name__),
                type(event).__name__,
                event.event_id,
            )
            raise

    def clear(self) -> None:
        self._handlers.clear()
