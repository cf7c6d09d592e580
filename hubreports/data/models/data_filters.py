from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ReportFilters(BaseModel):
    """Filters submitted with the report form.

    The completion window is half open: ``completed_at_gt <= completed_at < completed_at_lt``.
    Either bound may be omitted.
    """
    completed_at_gt: Optional[datetime] = Field(default=None, description="Lower bound (inclusive) on order completion time")
    completed_at_lt: Optional[datetime] = Field(default=None, description="Upper bound (exclusive) on order completion time")
    order_cycle_id: Optional[int | list[int]] = Field(default=None, description="Order cycle filter (single cycle or list of cycles)")
    distributor_id: Optional[int | list[int]] = Field(default=None, description="Hub filter (single hub or list of hubs)")
    supplier_id: Optional[int | list[int]] = Field(default=None, description="Producer filter (single producer or list of producers)")


class ReportOptions(BaseModel):
    """Presentation toggles; they change layout, never aggregated values."""
    display_summary_row: bool = Field(default=True, description="Emit per-group summary rows and the grand total row")
    display_header_row: bool = Field(default=False, description="Render grouped dimensions once above their rows")
