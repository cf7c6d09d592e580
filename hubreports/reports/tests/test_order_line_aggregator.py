from datetime import timedelta

import pytest

from hubreports.data.models import ReportFilters
from hubreports.reports.aggregator import ROW_COLUMNS, OrderLineAggregator

from conftest import NOW


def test_one_row_per_line_item(food_hub, load):
    rows = OrderLineAggregator(load(food_hub.builder)).rows(ReportFilters())
    assert len(rows) == 3
    assert rows["line_item_id"].is_unique
    assert list(rows.columns) == ROW_COLUMNS


def test_rows_carry_dimensions_and_costs(food_hub, load):
    b = food_hub.builder
    b.line_item(food_hub.order1, food_hub.variant_small, 4, price=9.5, fees_total=1.25)
    rows = OrderLineAggregator(load(b)).rows(ReportFilters())
    row = rows[rows["line_item_id"] == 4].iloc[0]
    assert row["hub"] == "Distributor"
    assert row["producer"] == "Supplier Name"
    assert row["product"] == "Baked Beans"
    assert row["variant"] == "1g Small"
    assert row["customer"] == "Bilbo ABRA"
    assert row["item"] == 38.0
    assert row["item_with_fees"] == 39.25
    assert row["total_units"] == 0.004
    assert row["curr_cost_per_unit"] == 10.0
    assert row["total_cost"] == 40.0


def test_order_total_applies_hub_voucher(food_hub, load):
    b = food_hub.builder
    b.voucher("TENPCT", food_hub.distributor, 10)
    b.tables["orders"][0]["voucher_code"] = "TENPCT"
    rows = OrderLineAggregator(load(b)).rows(ReportFilters())
    totals = rows.drop_duplicates("order_id").set_index("order_id")["order_total"]
    assert totals[food_hub.order1] == pytest.approx(36.0)
    assert totals[food_hub.order2] == pytest.approx(25.0)


def test_voucher_of_another_hub_is_ignored(food_hub, load):
    b = food_hub.builder
    other_hub = b.enterprise("Other Hub", distributor=True)
    b.voucher("OTHER", other_hub, 50)
    b.tables["orders"][0]["voucher_code"] = "OTHER"
    rows = OrderLineAggregator(load(b)).rows(ReportFilters())
    assert rows[rows["order_id"] == food_hub.order1]["order_total"].iloc[0] == 40.0


def test_missing_unit_value_leaves_total_units_blank(food_hub, load):
    b = food_hub.builder
    loose = b.variant(food_hub.product, "Loose", unit_value=None)
    b.line_item(food_hub.order2, loose, 2)
    rows = OrderLineAggregator(load(b)).rows(ReportFilters())
    assert rows[rows["variant_id"] == loose]["total_units"].isna().all()


def test_empty_window_gives_empty_frame(food_hub, load):
    rows = OrderLineAggregator(load(food_hub.builder)).rows(
        ReportFilters(completed_at_gt=NOW - timedelta(hours=10))
    )
    assert rows.empty
    assert list(rows.columns) == ROW_COLUMNS
