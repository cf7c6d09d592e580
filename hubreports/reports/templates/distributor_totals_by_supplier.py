from __future__ import annotations

from typing import Any, Dict

import pandas as pd

from .base import COST_AGGREGATIONS, Column, GroupingRule, ReportTemplate, sum_or_blank


def hub_summary(rows: pd.DataFrame, lines: pd.DataFrame, label: str) -> Dict[str, Any]:
    """Totals for one hub; shipping is counted once per order."""
    orders = lines.drop_duplicates("order_id")
    return {
        "producer": label,
        "total_cost": sum_or_blank(rows["total_cost"]),
        "total_shipping_cost": orders["order_ship_total"].sum(),
    }


DISTRIBUTOR_TOTALS_BY_SUPPLIER = ReportTemplate(
    slug="order_cycle_distributor_totals_by_supplier",
    name="Order Cycle Distributor Totals by Supplier",
    description="Quantities and costs per hub and variant, with a total per hub.",
    columns=(
        Column("hub", "Hub"),
        Column("producer", "Producer"),
        Column("product", "Product"),
        Column("variant", "Variant"),
        Column("quantity", "Quantity"),
        Column("curr_cost_per_unit", "Curr. Cost per Unit"),
        Column("total_cost", "Total Cost"),
        Column("total_shipping_cost", "Total Shipping Cost"),
        Column("shipping_method", "Shipping Method"),
    ),
    sort_by=("hub", "distributor_id", "producer", "product", "variant", "variant_id"),
    aggregate_by=(
        "distributor_id", "hub", "supplier_id", "producer", "product_id", "product", "variant_id", "variant",
    ),
    aggregations=COST_AGGREGATIONS,
    rules=(
        GroupingRule(group_by=("distributor_id",), header_columns=("hub",), summary=hub_summary),
    ),
)
