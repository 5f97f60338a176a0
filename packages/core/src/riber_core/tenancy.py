"""Current-tenant context.

The host (HTTP middleware, job runner, test) sets the tenant for the
running task; domain flows read it through ``require_tenant_id`` or an
injected provider.
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import TYPE_CHECKING

from .primitives.exceptions import TenantContextError
from .primitives.id_generator import is_nil

if TYPE_CHECKING:
    from uuid import UUID

_tenant_id: ContextVar[UUID | None] = ContextVar("tenant_id", default=None)


def get_tenant_id() -> UUID | None:
    """Get current tenant ID from context."""
    return _tenant_id.get()


def set_tenant_id(tenant_id: UUID | None) -> None:
    """Set tenant ID in context."""
    _tenant_id.set(tenant_id)


def require_tenant_id() -> UUID:
    """Return the current tenant ID.

    Raises:
        TenantContextError: If no tenant is set or the tenant is the nil UUID.
    """
    tenant_id = _tenant_id.get()
    if tenant_id is None or is_nil(tenant_id):
        raise TenantContextError("No tenant is set for the current context")
    return tenant_id
