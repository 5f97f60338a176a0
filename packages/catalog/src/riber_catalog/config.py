"""Catalog settings.

The host builds one ``CatalogSettings`` (from env, files or defaults) and
passes it to the components that need it; nothing here reads the
environment.
"""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class CatalogSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    reconciliation_poll_interval: float = Field(
        default=7 * 24 * 3600.0,
        gt=0,
        description="Seconds between reconciliation sweeps (weekly by default).",
    )
    orphan_grace_period: timedelta = Field(
        default=timedelta(hours=24),
        description=(
            "Minimum age before an image no product references is swept. "
            "Covers images whose product is still being provisioned. Also the "
            "minimum age of a stored object with no record before it is swept."
        ),
    )
    reconciliation_batch_size: int = Field(
        default=200,
        ge=1,
        description="Stored keys checked against the repository per query.",
    )
    compensation_max_attempts: int = Field(default=3, ge=1)
    compensation_backoff: float = Field(
        default=0.5, ge=0, description="Base delay in seconds, doubled per retry."
    )
    local_storage_root: Path = Path("storage/images")
