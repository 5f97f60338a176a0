"""Provisioning state threaded through one saga invocation."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProvisioningStep(str, Enum):
    START = "START"
    CATEGORY_VERIFIED = "CATEGORY_VERIFIED"
    ASSET_UPLOADED = "ASSET_UPLOADED"
    ASSET_PERSISTED = "ASSET_PERSISTED"
    AGGREGATE_PERSISTED = "AGGREGATE_PERSISTED"
    COMMITTED = "COMMITTED"
    ROLLED_BACK = "ROLLED_BACK"
    ROLLED_BACK_WITH_COMPENSATION = "ROLLED_BACK_WITH_COMPENSATION"


TERMINAL_STEPS = frozenset(
    {
        ProvisioningStep.COMMITTED,
        ProvisioningStep.ROLLED_BACK,
        ProvisioningStep.ROLLED_BACK_WITH_COMPENSATION,
    }
)


class StepRecord(BaseModel):
    """Immutable record of a single step transition."""

    model_config = ConfigDict(frozen=True)

    step: ProvisioningStep
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: dict[str, Any] = Field(default_factory=dict)


class ProvisioningState(BaseModel):
    """Where a product creation flow is, and what it has touched outside
    the transaction.

    Whether a failure needs compensation is read off this object only
    (:attr:`requires_compensation`), never inferred from the exception.
    """

    command_id: str
    step: ProvisioningStep = ProvisioningStep.START
    uploaded_key: str | None = None
    compensation_published: bool = False
    failed_at: ProvisioningStep | None = None
    error: str | None = None
    history: list[StepRecord] = Field(default_factory=list)

    @property
    def is_terminal(self) -> bool:
        return self.step in TERMINAL_STEPS

    @property
    def requires_compensation(self) -> bool:
        return (
            self.uploaded_key is not None
            and self.step is not ProvisioningStep.COMMITTED
            and not self.compensation_published
        )

    def advance(self, step: ProvisioningStep, **metadata: Any) -> None:
        if self.is_terminal:
            raise RuntimeError(f"Provisioning already finished in {self.step.value}")
        self.step = step
        self.history.append(StepRecord(step=step, metadata=metadata))

    def record_upload(self, key: str) -> None:
        self.uploaded_key = key
        self.advance(ProvisioningStep.ASSET_UPLOADED, key=key)

    def fail(self, error: BaseException) -> None:
        """Move to the terminal failure step matching what was cleaned up."""
        self.failed_at = self.step
        self.error = f"{type(error).__name__}: {error}"
        terminal = (
            ProvisioningStep.ROLLED_BACK_WITH_COMPENSATION
            if self.compensation_published
            else ProvisioningStep.ROLLED_BACK
        )
        self.step = terminal
        self.history.append(
            StepRecord(step=terminal, metadata={"failed_at": self.failed_at.value})
        )
