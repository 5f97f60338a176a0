from __future__ import annotations

import asyncio
import uuid

import pytest

from riber_core.correlation import (
    ensure_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from riber_core.primitives.exceptions import TenantContextError
from riber_core.primitives.id_generator import NIL_UUID
from riber_core.tenancy import get_tenant_id, require_tenant_id, set_tenant_id


def test_ensure_correlation_id_generates_once() -> None:
    set_correlation_id(None)
    first = ensure_correlation_id()
    assert first
    assert ensure_correlation_id() == first
    assert get_correlation_id() == first
    set_correlation_id(None)


def test_require_tenant_id_returns_current_tenant() -> None:
    tenant = uuid.uuid4()
    set_tenant_id(tenant)
    try:
        assert require_tenant_id() == tenant
    finally:
        set_tenant_id(None)


@pytest.mark.parametrize("tenant", [None, NIL_UUID])
def test_require_tenant_id_rejects_missing_or_nil(tenant: uuid.UUID | None) -> None:
    set_tenant_id(tenant)
    try:
        with pytest.raises(TenantContextError):
            require_tenant_id()
    finally:
        set_tenant_id(None)


@pytest.mark.asyncio()
async def test_tenant_id_does_not_leak_between_tasks() -> None:
    tenant = uuid.uuid4()

    async def inner() -> uuid.UUID | None:
        set_tenant_id(uuid.uuid4())
        return get_tenant_id()

    set_tenant_id(tenant)
    try:
        other = await asyncio.create_task(inner())
        assert other != tenant
        assert get_tenant_id() == tenant
    finally:
        set_tenant_id(None)
