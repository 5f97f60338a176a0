from .unit_of_work import InMemoryUnitOfWork

__all__ = [
    "InMemoryUnitOfWork",
]
