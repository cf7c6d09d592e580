from datetime import datetime

import numpy as np
import pandas as pd

from hubreports.data.models import (
    Address, OrderCycleResponse, OrderResponse, ProductResponse, VariantResponse,
    is_paid, join_name_parts, line_amount, order_total_before_discount, unit_scale_factor,
)


def _variant(**kwargs):
    return VariantResponse(variant_id=1, product_id=1, price=10.0, **kwargs)


def test_variant_full_name_from_weight_unit_and_description():
    product = ProductResponse(product_id=1, name="Baked Beans", supplier_id=2, variant_unit="weight", variant_unit_scale=1)
    assert _variant(unit_value=1, unit_description="Big").full_name(product) == "1g Big"


def test_variant_full_name_scales_kilograms():
    product = ProductResponse(product_id=1, name="Potatoes", supplier_id=2, variant_unit="weight", variant_unit_scale=1000)
    assert _variant(unit_value=2500).full_name(product) == "2.5kg"


def test_variant_full_name_items():
    product = ProductResponse(product_id=1, name="Eggs", supplier_id=2, variant_unit="items", variant_unit_name="each")
    assert _variant(unit_value=6).full_name(product) == "6 each"


def test_variant_full_name_with_display_name():
    product = ProductResponse(product_id=1, name="Milk", supplier_id=2, variant_unit="volume", variant_unit_scale=1)
    assert _variant(unit_value=1, display_name="Jersey").full_name(product) == "Jersey (1L)"
    assert _variant(unit_value=1, display_name="Jersey 1L").full_name(product) == "Jersey 1L"


def test_order_cycle_without_close_time_is_unbounded():
    cycle = OrderCycleResponse(order_cycle_id=1, name="My Order Cycle", orders_open_at=datetime(2026, 1, 1))
    assert cycle.contains(datetime(2030, 1, 1))
    assert not cycle.contains(datetime(2025, 12, 31))
    assert cycle.label.startswith("My Order Cycle (2026-01-01 00:00 - ")


def test_order_cycle_without_bounds():
    cycle = OrderCycleResponse(order_cycle_id=1, name="Always")
    assert cycle.contains(datetime(1999, 1, 1))
    assert cycle.label == "Always"


def test_order_from_flat_record_builds_addresses():
    order = OrderResponse.from_record({
        "order_id": 7, "number": "R7", "distributor_id": 1,
        "bill_firstname": "Rosie", "bill_lastname": "Cotton", "bill_zipcode": "1234",
        "ship_city": "Bywater", "payment_state": "paid", "quantity": 3,
    })
    assert order.bill_address.full_name == "Rosie Cotton"
    assert order.bill_address.zipcode == "1234"
    assert order.ship_address.city == "Bywater"
    assert order.paid


def test_name_parts_skip_missing_values():
    assert join_name_parts("Rosie", None) == "Rosie"
    assert join_name_parts(np.nan, " Cotton ") == "Cotton"
    assert join_name_parts(None, "") == ""
    assert Address(firstname="Rosie").full_name == "Rosie"


def test_unit_scale_factor_matches_product():
    for unit in ("weight", "volume", "items"):
        product = ProductResponse(product_id=1, name="P", supplier_id=2, variant_unit=unit)
        assert product.scale_factor == unit_scale_factor(unit)
    assert unit_scale_factor("weight") == 1000.0
    assert unit_scale_factor(None) == 1.0


def test_order_helpers_work_on_frames_like_the_model():
    order = OrderResponse(
        order_id=1, number="R1", distributor_id=1, item_total=40.0, line_fees_total=4.0,
        admin_and_handling_total=1.0, ship_total=5.0, payment_fee_total=0.5, payment_state="paid",
    )
    frame = pd.DataFrame([order.model_dump()] * 2)
    totals = order_total_before_discount(
        frame["item_total"], frame["line_fees_total"], frame["admin_and_handling_total"],
        frame["ship_total"], frame["payment_fee_total"],
    )
    assert totals.tolist() == [order.pre_discount_total] * 2 == [50.5, 50.5]
    assert is_paid(pd.Series(["paid", "balance_due", None])).tolist() == [True, False, False]
    assert line_amount(pd.Series([3, 4]), pd.Series([10.0, 2.5])).tolist() == [30.0, 10.0]
