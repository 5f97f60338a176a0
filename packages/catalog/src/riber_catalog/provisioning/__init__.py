"""Product provisioning: command, saga and compensation consumer."""

from __future__ import annotations

from .commands import (
    CreateProductCommand,
    CreateProductCommandValidator,
    ImageAttachment,
)
from .compensation import DeleteStoredImageHandler, register_compensation
from .saga import ProductProvisioningSaga
from .state import ProvisioningState, ProvisioningStep, StepRecord

__all__ = [
    "CreateProductCommand",
    "CreateProductCommandValidator",
    "DeleteStoredImageHandler",
    "ImageAttachment",
    "ProductProvisioningSaga",
    "ProvisioningState",
    "ProvisioningStep",
    "StepRecord",
    "register_compensation",
]
