"""Instrumentation hooks: middleware around named operations.

A hook receives the operation name, a dict of attributes and a
``next_handler`` to await; tracing and metrics adapters wrap the call
however they like. Operation names used by the catalog:

- ``saga.provisioning.<step>`` for each provisioning step
- ``saga.provisioning.compensate``
- ``reconciliation.sweep``
- ``event.dispatch.<EventType>``
"""

from __future__ import annotations

import fnmatch
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any, NamedTuple, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence


@runtime_checkable
class InstrumentationHook(Protocol):
    async def __call__(
        self,
        operation: str,
        attributes: dict[str, Any],
        next_handler: Callable[[], Awaitable[Any]],
    ) -> Any: ...


class HookRegistration(NamedTuple):
    hook: InstrumentationHook
    operations: tuple[str, ...]

    def applies_to(self, operation: str) -> bool:
        """No patterns means every operation; otherwise any glob must match."""
        return not self.operations or any(
            fnmatch.fnmatchcase(operation, pattern) for pattern in self.operations
        )


class HookRegistry:
    """Hooks in registration order; the first registered is the outermost."""

    def __init__(self) -> None:
        self._registrations: list[HookRegistration] = []

    def register(
        self, hook: InstrumentationHook, *, operations: Sequence[str] = ()
    ) -> Callable[[], None]:
        """Add *hook*, limited to *operations* globs if given.

        Returns a callable that removes this registration again.
        """
        registration = HookRegistration(hook, tuple(operations))
        self._registrations.append(registration)

        def unregister() -> None:
            self._registrations[:] = [
                r for r in self._registrations if r is not registration
            ]

        return unregister

    async def execute_all(
        self,
        operation: str,
        attributes: dict[str, Any],
        next_handler: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Run *next_handler* inside every hook that applies to *operation*."""
        chain = next_handler
        for registration in reversed(self._registrations):
            if registration.applies_to(operation):
                chain = _bind(registration.hook, operation, attributes, chain)
        return await chain()

    def clear(self) -> None:
        self._registrations.clear()

    def __len__(self) -> int:
        return len(self._registrations)


def _bind(
    hook: InstrumentationHook,
    operation: str,
    attributes: dict[str, Any],
    inner: Callable[[], Awaitable[Any]],
) -> Callable[[], Awaitable[Any]]:
    async def call() -> Any:
        return await hook(operation, attributes, inner)

    return call


_hook_registry_var: ContextVar[HookRegistry | None] = ContextVar(
    "hook_registry", default=None
)


def get_hook_registry() -> HookRegistry:
    """The registry of the current context, created empty on first use.

    Each context gets its own, so hooks set in one task or test do not
    leak into another.
    """
    registry = _hook_registry_var.get()
    if registry is None:
        registry = HookRegistry()
        _hook_registry_var.set(registry)
    return registry


def set_hook_registry(registry: HookRegistry) -> None:
    _hook_registry_var.set(registry)
