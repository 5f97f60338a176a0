from .background_worker import IBackgroundWorker
from .event_dispatcher import EventHandler, IEventDispatcher
from .messaging import IEventPublisher
from .unit_of_work import UnitOfWork

__all__ = [
    "EventHandler",
    "IBackgroundWorker",
    "IEventDispatcher",
    "IEventPublisher",
    "UnitOfWork",
]
