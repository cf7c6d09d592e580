from __future__ import annotations

from typing import Any, Dict

import pandas as pd

from .base import COST_AGGREGATIONS, Column, GroupingRule, ReportTemplate, sum_or_blank


def variant_summary(rows: pd.DataFrame, lines: pd.DataFrame, label: str) -> Dict[str, Any]:
    """Totals for one variant across all hubs."""
    return {
        "hub": label,
        "quantity": rows["quantity"].sum(),
        "curr_cost_per_unit": rows["curr_cost_per_unit"].iloc[0],
        "total_cost": sum_or_blank(rows["total_cost"]),
    }


SUPPLIER_TOTALS_BY_DISTRIBUTOR = ReportTemplate(
    slug="order_cycle_supplier_totals_by_distributor",
    name="Order Cycle Supplier Totals by Distributor",
    description="Quantities and costs per variant and hub, with a total per variant.",
    columns=(
        Column("producer", "Producer"),
        Column("product", "Product"),
        Column("variant", "Variant"),
        Column("hub", "Hub"),
        Column("quantity", "Quantity"),
        Column("curr_cost_per_unit", "Curr. Cost per Unit"),
        Column("total_cost", "Total Cost"),
        Column("shipping_method", "Shipping Method"),
    ),
    sort_by=("producer", "supplier_id", "product", "variant", "variant_id", "hub"),
    aggregate_by=(
        "supplier_id", "producer", "product_id", "product", "variant_id", "variant", "distributor_id", "hub",
    ),
    aggregations=COST_AGGREGATIONS,
    rules=(
        GroupingRule(group_by=("supplier_id",), header_columns=("producer",)),
        GroupingRule(group_by=("variant_id",), summary=variant_summary),
    ),
)
