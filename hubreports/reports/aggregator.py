from __future__ import annotations

from typing import Dict

import pandas as pd

from ..config import get_config
from ..data.frames import frame_records
from ..data.interface import DataAccess
from ..data.models import (
    OrderResponse, ReportFilters, Voucher,
    is_paid, join_name_parts, line_amount, order_total_before_discount, unit_scale_factor,
)
from ..logging import get_logger

# Columns of the flat per-line-item frame handed to the grouper.
ROW_COLUMNS = [
    # identity
    "line_item_id", "order_id", "variant_id", "product_id", "supplier_id", "distributor_id", "order_cycle_id",
    # dimensions
    "hub", "customer", "email", "phone", "producer", "product", "variant", "sku",
    # line measures
    "quantity", "item", "item_with_fees", "total_units", "curr_cost_per_unit", "total_cost",
    # order level values
    "order_admin_and_handling", "order_ship_total", "order_payment_fee_total", "order_total", "order_paid",
    "shipping_method", "delivery",
    "ship_street", "ship_street_2", "ship_city", "ship_postcode", "ship_state",
    "comments", "order_cycle", "payment_method", "customer_code", "tags",
    "billing_street", "billing_street_2", "billing_city", "billing_postcode", "billing_state",
    "order_number", "completed_at",
]


class OrderLineAggregator:
    """Flattens completed orders into one row per line item.

    Line level costs use the price paid; ``curr_cost_per_unit`` and
    ``total_cost`` use the variant's current price. Order totals include the
    voucher discount of the order's voucher, when the voucher belongs to the
    order's hub.
    """

    def __init__(self, data_access: DataAccess) -> None:
        self.data_access = data_access
        self.config = get_config()
        self.logger = get_logger(__name__)

    def rows(self, filters: ReportFilters) -> pd.DataFrame:
        lines = self.data_access.get_line_items(filters)
        if lines.empty:
            self.logger.info("No line items matched the report filters")
            return pd.DataFrame(columns=ROW_COLUMNS)

        money = self.config.money_precision
        units = self.config.units_precision

        scale = lines["variant_unit"].map(unit_scale_factor)
        item = line_amount(lines["quantity"], lines["price"])
        pre_discount = order_total_before_discount(
            lines["item_total"], lines["line_fees_total"], lines["admin_and_handling_total"],
            lines["ship_total"], lines["payment_fee_total"],
        )
        adjustments = lines["order_id"].map(self._voucher_adjustments(lines)).fillna(0.0)

        df = pd.DataFrame({
            "line_item_id": lines["line_item_id"],
            "order_id": lines["order_id"],
            "variant_id": lines["variant_id"],
            "product_id": lines["product_id"],
            "supplier_id": lines["supplier_id"],
            "distributor_id": lines["distributor_id"],
            "order_cycle_id": lines["order_cycle_id"],
            "hub": lines["hub"],
            "customer": pd.Series(
                [join_name_parts(first, last) for first, last in zip(lines["bill_firstname"], lines["bill_lastname"])],
                index=lines.index,
            ),
            "email": lines["email"],
            "phone": lines["bill_phone"],
            "producer": lines["producer"],
            "product": lines["product_name"],
            "variant": lines["variant_name"],
            "sku": lines["sku"],
            "quantity": lines["quantity"],
            "item": item.round(money),
            "item_with_fees": (item + lines["fees_total"]).round(money),
            "total_units": (lines["quantity"] * lines["unit_value"] / scale).round(units),
            "curr_cost_per_unit": lines["variant_price"],
            "total_cost": line_amount(lines["quantity"], lines["variant_price"]).round(money),
            "order_admin_and_handling": lines["admin_and_handling_total"].round(money),
            "order_ship_total": lines["ship_total"].round(money),
            "order_payment_fee_total": lines["payment_fee_total"].round(money),
            "order_total": (pre_discount + adjustments).round(money),
            "order_paid": is_paid(lines["payment_state"]),
            "shipping_method": lines["shipping_method"],
            "delivery": lines["requires_delivery"],
            "ship_street": lines["ship_address1"],
            "ship_street_2": lines["ship_address2"],
            "ship_city": lines["ship_city"],
            "ship_postcode": lines["ship_zipcode"],
            "ship_state": lines["ship_state"],
            "comments": lines["special_instructions"],
            "order_cycle": lines["order_cycle_name"],
            "payment_method": lines["payment_method"],
            "customer_code": lines["customer_code"],
            "tags": lines["customer_tags"],
            "billing_street": lines["bill_address1"],
            "billing_street_2": lines["bill_address2"],
            "billing_city": lines["bill_city"],
            "billing_postcode": lines["bill_zipcode"],
            "billing_state": lines["bill_state"],
            "order_number": lines["number"],
            "completed_at": lines["completed_at"],
        })
        self.logger.debug(f"Aggregated {len(df)} line items from {df['order_id'].nunique()} orders")
        return df[ROW_COLUMNS]

    def _voucher_adjustments(self, lines: pd.DataFrame) -> Dict[int, float]:
        vouchers: Dict[str, Voucher] = self.data_access.get_vouchers()
        orders = lines.drop_duplicates("order_id")
        orders = orders[orders["voucher_code"].notna()]
        adjustments: Dict[int, float] = {}
        for record in frame_records(orders):
            order = OrderResponse.from_record(record)
            voucher = vouchers.get(order.voucher_code)
            if voucher is None or voucher.enterprise_id != order.distributor_id:
                self.logger.warning(
                    f"Order {order.number} references voucher {order.voucher_code!r} "
                    f"not offered by its hub; no discount applied"
                )
                continue
            adjustments[order.order_id] = voucher.compute_amount(order)
        return adjustments
