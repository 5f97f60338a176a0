import uuid
from typing import Protocol

NIL_UUID = uuid.UUID(int=0)


class IIDGenerator(Protocol):
    """
    Protocol for ID generation strategies.
    Useful for swapping UUIDv4 for time-ordered identifiers in production.
    """

    def next_id(self) -> uuid.UUID:
        """Generates the next unique identifier."""
        ...


class UUID4Generator(IIDGenerator):
    """
    Default ID generator using UUIDv4.
    Zero external dependencies.
    """

    def next_id(self) -> uuid.UUID:
        return uuid.uuid4()


def is_nil(value: uuid.UUID | None) -> bool:
    """Return True for ``None`` and for the all-zero UUID."""
    return value is None or value == NIL_UUID
