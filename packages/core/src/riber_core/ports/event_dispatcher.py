"""IEventDispatcher — in-process routing of domain events to handlers."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import (
    TYPE_CHECKING,
    Any,
    Generic,
    Protocol,
    TypeAlias,
    TypeVar,
    runtime_checkable,
)

if TYPE_CHECKING:
    from ..domain.events import DomainEvent

E = TypeVar("E", bound="DomainEvent")


class SupportsHandle(Protocol):
    def handle(self, event: Any) -> Awaitable[None] | None: ...


# Either an object with ``handle(event)`` or a plain function; both may be
# sync or async.
EventHandler: TypeAlias = SupportsHandle | Callable[[Any], Awaitable[None] | None]


@runtime_checkable
class IEventDispatcher(Protocol, Generic[E]):
    def register(self, event_type: type[E], handler: EventHandler) -> None: ...

    async def dispatch(self, events: list[DomainEvent]) -> None:
        """Deliver each event to the handlers registered for its exact type."""
        ...
