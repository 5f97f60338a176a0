"""Commands, event dispatching and publishing."""

from __future__ import annotations

from .command import Command
from .event_dispatcher import EventDispatcher
from .publishers import InProcessEventPublisher

__all__ = [
    "Command",
    "EventDispatcher",
    "InProcessEventPublisher",
]
