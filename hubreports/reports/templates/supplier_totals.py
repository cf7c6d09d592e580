from __future__ import annotations

from typing import Any, Dict

import pandas as pd

from .base import COST_AGGREGATIONS, Column, GroupingRule, ReportTemplate, sum_or_blank


def grand_total(rows: pd.DataFrame, lines: pd.DataFrame, label: str) -> Dict[str, Any]:
    return {
        "producer": "",
        "product": "",
        "variant": label,
        "quantity": rows["quantity"].sum(),
        "total_units": sum_or_blank(rows["total_units"]),
        "total_cost": sum_or_blank(rows["total_cost"]),
    }


SUPPLIER_TOTALS = ReportTemplate(
    slug="order_cycle_supplier_totals",
    name="Order Cycle Supplier Totals",
    description="Quantities and costs per variant, grouped by producer.",
    columns=(
        Column("producer", "Producer"),
        Column("product", "Product"),
        Column("variant", "Variant"),
        Column("quantity", "Quantity"),
        Column("total_units", "Total Units"),
        Column("curr_cost_per_unit", "Curr. Cost per Unit"),
        Column("total_cost", "Total Cost"),
    ),
    sort_by=("producer", "supplier_id", "product", "variant", "variant_id"),
    aggregate_by=("supplier_id", "producer", "product_id", "product", "variant_id", "variant"),
    aggregations=COST_AGGREGATIONS,
    rules=(
        GroupingRule(group_by=("supplier_id",), header_columns=("producer",)),
    ),
    grand_total=grand_total,
)
