from __future__ import annotations

from typing import Any, Dict

import pandas as pd

from .base import Column, GroupingRule, ReportTemplate


def order_summary(rows: pd.DataFrame, lines: pd.DataFrame, label: str) -> Dict[str, Any]:
    """Totals for one order: its items plus the order level fees and payment state."""
    first = rows.iloc[0]
    return {
        "hub": first["hub"],
        "customer": first["customer"],
        "email": first["email"],
        "phone": first["phone"],
        "item": rows["item"].sum(),
        "item_with_fees": rows["item_with_fees"].sum(),
        "admin_and_handling": first["order_admin_and_handling"],
        "ship": first["order_ship_total"],
        "pay_fee": first["order_payment_fee_total"],
        "total": first["order_total"],
        "paid": bool(first["order_paid"]),
    }


CUSTOMER_TOTALS = ReportTemplate(
    slug="order_cycle_customer_totals",
    name="Order Cycle Customer Totals",
    description="One row per line item, with a summary row per order.",
    columns=(
        Column("hub", "Hub"),
        Column("customer", "Customer"),
        Column("email", "Email"),
        Column("phone", "Phone"),
        Column("producer", "Producer"),
        Column("product", "Product"),
        Column("variant", "Variant"),
        Column("quantity", "Quantity"),
        Column("item", "Item ($)"),
        Column("item_with_fees", "Item + Fees ($)"),
        Column("admin_and_handling", "Admin & Handling ($)"),
        Column("ship", "Ship ($)"),
        Column("pay_fee", "Pay fee ($)"),
        Column("total", "Total ($)"),
        Column("paid", "Paid?"),
        Column("shipping_method", "Shipping"),
        Column("delivery", "Delivery?"),
        Column("ship_street", "Ship Street"),
        Column("ship_street_2", "Ship Street 2"),
        Column("ship_city", "Ship City"),
        Column("ship_postcode", "Ship Postcode"),
        Column("ship_state", "Ship State"),
        Column("comments", "Comments"),
        Column("sku", "SKU"),
        Column("order_cycle", "Order Cycle"),
        Column("payment_method", "Payment Method"),
        Column("customer_code", "Customer Code"),
        Column("tags", "Tags"),
        Column("billing_street", "Billing Street"),
        Column("billing_street_2", "Billing Street 2"),
        Column("billing_city", "Billing City"),
        Column("billing_postcode", "Billing Postcode"),
        Column("billing_state", "Billing State"),
        Column("order_number", "Order number"),
        Column("completed_at", "Date"),
    ),
    sort_by=("hub", "customer", "completed_at", "order_id", "line_item_id"),
    rules=(
        GroupingRule(group_by=("order_id",), summary=order_summary),
    ),
)
