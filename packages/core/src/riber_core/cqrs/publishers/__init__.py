from .in_process import InProcessEventPublisher

__all__ = ["InProcessEventPublisher"]
