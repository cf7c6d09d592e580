# hubreports/data/interface.py
from __future__ import annotations

from typing import Dict, List, Optional, Protocol

import pandas as pd

from .models import (
    # Filter classes
    ReportFilters,
    # Response models
    OrderCycleResponse,
    OrderResponse,
    Voucher,
    # List response models
    OptionList,
    DateBounds,
)


# ---- Data access protocol ----

class DataAccess(Protocol):
    """
    Backend-agnostic contract for the reports.

    Implementations return fresh frames on every call; callers may mutate
    what they get back without affecting later calls.
    """

    # Queries to populate dropdowns and filters

    def get_date_bounds(self) -> Optional[DateBounds]:
        """Get the first and last order completion time, or None without completed orders."""
        ...

    def list_order_cycles(self) -> List[OrderCycleResponse]:
        """List all order cycles, most recently opened first."""
        ...

    def get_order_cycle(self, order_cycle_id: int) -> Optional[OrderCycleResponse]:
        """Get a single order cycle."""
        ...

    def list_distributors(self) -> OptionList:
        """List all hubs."""
        ...

    def list_suppliers(self) -> OptionList:
        """List all producers."""
        ...

    # Order data queries
    def get_orders(self, filters: ReportFilters) -> pd.DataFrame:
        """Get completed orders matching the filters, one row per order."""
        ...

    def get_order(self, order_id: int) -> Optional[OrderResponse]:
        """Get a single order with its totals."""
        ...

    # Line item data queries
    def get_line_items(self, filters: ReportFilters) -> pd.DataFrame:
        """Get line items of completed orders matching the filters, joined with
        their variant, product, producer, order, hub and order cycle."""
        ...

    # Voucher data queries
    def get_vouchers(self) -> Dict[str, Voucher]:
        """Get all configured vouchers keyed by code."""
        ...
