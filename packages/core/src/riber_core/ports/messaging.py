from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..domain.events import DomainEvent


@runtime_checkable
class IEventPublisher(Protocol):
    """
    Port for publishing domain events to in-process consumers.

    Delivery is at-least-once and fire-and-continue: ``publish`` returns as
    soon as the event has been handed over, before consumers have run.
    """

    async def publish(self, event: DomainEvent) -> None:
        """Hand *event* over for delivery to its consumers."""
        ...
