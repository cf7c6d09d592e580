from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class OrderCycleResponse(BaseModel):
    """Response model for order cycle data.

    Either end of the ordering window may be missing; a missing bound is
    treated as unbounded on that side.
    """
    order_cycle_id: int = Field(description="Unique order cycle identifier")
    name: str = Field(description="Order cycle name")
    orders_open_at: Optional[datetime] = Field(default=None, description="When the cycle opens for orders")
    orders_close_at: Optional[datetime] = Field(default=None, description="When the cycle closes for orders")

    def contains(self, ts: datetime) -> bool:
        if self.orders_open_at is not None and ts < self.orders_open_at:
            return False
        if self.orders_close_at is not None and ts >= self.orders_close_at:
            return False
        return True

    @property
    def label(self) -> str:
        opens = self.orders_open_at.strftime("%Y-%m-%d %H:%M") if self.orders_open_at else ""
        closes = self.orders_close_at.strftime("%Y-%m-%d %H:%M") if self.orders_close_at else ""
        if not opens and not closes:
            return self.name
        return f"{self.name} ({opens} - {closes})"
