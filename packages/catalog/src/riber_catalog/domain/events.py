"""Catalog domain events."""

from __future__ import annotations

from riber_core.domain.events import DomainEvent


class StoredImageDeletionRequested(DomainEvent):
    """An uploaded object must be removed from image storage.

    Published by the provisioning saga when a flow fails after its upload
    succeeded; the object has no committed record pointing at it.
    """

    key: str
    reason: str | None = None
