from datetime import timedelta

from hubreports.data.models import ReportFilters, ReportOptions
from hubreports.reports.service import generate_report

from conftest import NOW

SLUG = "order_cycle_supplier_totals"


def _body(table):
    return [r.cells for r in table.rows if r.kind != "header"]


def test_columns_without_header_row(food_hub, load):
    table = generate_report(load(food_hub.builder), SLUG, options=ReportOptions(display_header_row=False))
    assert table.columns == [
        "PRODUCER", "PRODUCT", "VARIANT", "QUANTITY", "TOTAL UNITS", "CURR. COST PER UNIT", "TOTAL COST",
    ]
    assert table.rows[0].cells[0] == "Supplier Name"
    assert all(r.kind != "header" for r in table.rows)
    assert 'class="header-row"' not in table.to_html()


def test_columns_with_header_row(food_hub, load):
    table = generate_report(load(food_hub.builder), SLUG, options=ReportOptions(display_header_row=True))
    assert table.columns == [
        "PRODUCT", "VARIANT", "QUANTITY", "TOTAL UNITS", "CURR. COST PER UNIT", "TOTAL COST",
    ]
    assert table.rows[0].kind == "header"
    assert table.rows[0].label == "Supplier Name"
    assert '<td class="header-row" colspan="6">Supplier Name</td>' in table.to_html()


def test_aggregates_results_per_variant(food_hub, load):
    b = food_hub.builder
    b.line_item(food_hub.order1, food_hub.variant_small, 4)
    # a third completed order without line items
    b.order(food_hub.distributor, NOW - timedelta(hours=1), order_cycle_id=food_hub.order_cycle)
    table = generate_report(load(b), SLUG, options=ReportOptions())

    # 1 row per variant + 1 summary row
    assert _body(table) == [
        ["Supplier Name", "Baked Beans", "1g Big", "3", "0.003", "10.0", "30.0"],
        ["Supplier Name", "Baked Beans", "1g Small", "7", "0.007", "10.0", "70.0"],
        ["", "", "TOTAL", "10", "0.01", "", "100.0"],
    ]
    assert table.rows[-1].kind == "total"


def test_total_units_use_unit_value(builder, load):
    hub = builder.enterprise("Hub", distributor=True)
    farm = builder.enterprise("Farm", producer=True)
    syrup = builder.variant(builder.product("Syrup", farm, variant_unit="volume"), unit_value=0.01)
    first = builder.order(hub, NOW - timedelta(hours=3))
    second = builder.order(hub, NOW - timedelta(hours=2))
    builder.line_item(first, syrup, 3)
    builder.line_item(second, syrup, 4)

    table = generate_report(load(builder), SLUG)
    assert _body(table)[0] == ["Farm", "Syrup", "0.01L", "7", "0.07", "10.0", "70.0"]
    assert _body(table)[1] == ["", "", "TOTAL", "7", "0.07", "", "70.0"]


def test_header_row_does_not_change_values(food_hub, load):
    da = load(food_hub.builder)
    flat = generate_report(da, SLUG, options=ReportOptions(display_header_row=False))
    headed = generate_report(da, SLUG, options=ReportOptions(display_header_row=True))
    assert [r.cells[1:] for r in flat.body_rows] == [r.cells for r in headed.body_rows]


def test_summary_row_toggle_only_drops_total(food_hub, load):
    da = load(food_hub.builder)
    with_total = generate_report(da, SLUG, options=ReportOptions(display_summary_row=True))
    without = generate_report(da, SLUG, options=ReportOptions(display_summary_row=False))
    assert len(with_total.rows) == len(without.rows) + 1
    assert [r.cells for r in with_total.rows if r.kind == "data"] == [r.cells for r in without.rows]


def test_empty_result_has_no_rows(food_hub, load):
    table = generate_report(
        load(food_hub.builder), SLUG, ReportFilters(completed_at_lt=NOW - timedelta(hours=5000))
    )
    assert table.rows == []
    assert len(table.columns) == 7


def test_line_without_known_variant_leaves_costs_blank(food_hub, load):
    b = food_hub.builder
    b.line_item(food_hub.order1, 99, 2)
    table = generate_report(load(b), SLUG, options=ReportOptions(display_header_row=False))

    body = _body(table)
    assert body[-2] == ["", "", "", "2", "", "", ""]
    assert body[-1] == ["", "", "TOTAL", "8", "", "", ""]
    # known variants keep their values
    assert body[0] == ["Supplier Name", "Baked Beans", "1g Big", "3", "0.003", "10.0", "30.0"]
