from datetime import datetime

import numpy as np
import pytest

from hubreports.data.models import ReportOptions
from hubreports.reports.grouper import ReportRow
from hubreports.reports.renderer import ReportRenderer, format_cell
from hubreports.reports.service import generate_report
from hubreports.reports.templates import REPORTS, SUPPLIER_TOTALS, get_report


@pytest.mark.parametrize("value, expected", [
    (None, ""),
    (float("nan"), ""),
    (7, "7"),
    (np.int64(7), "7"),
    (10.0, "10.0"),
    (np.float64(0.003), "0.003"),
    (True, "Yes"),
    (False, "No"),
    (datetime(2026, 10, 19, 9, 5), "2026-10-19 09:05"),
    ("  Pickup ", "Pickup"),
])
def test_format_cell(value, expected):
    assert format_cell(value) == expected


def test_html_escapes_cells():
    rows = [ReportRow(kind="data", cells={"producer": "Fish & Chips <Co>"})]
    html = ReportRenderer().render(SUPPLIER_TOTALS, rows, ReportOptions()).to_html()
    assert "<td>Fish &amp; Chips &lt;Co&gt;</td>" in html
    assert html.startswith('<table class="report__table">')


def test_csv_skips_header_rows(food_hub, load):
    table = generate_report(
        load(food_hub.builder), "order_cycle_supplier_totals",
        options=ReportOptions(display_header_row=True, display_summary_row=True),
    )
    lines = table.to_csv().splitlines()
    assert lines[0] == "PRODUCT,VARIANT,QUANTITY,TOTAL UNITS,CURR. COST PER UNIT,TOTAL COST"
    assert lines[1:] == [
        "Baked Beans,1g Big,3,0.003,10.0,30.0",
        "Baked Beans,1g Small,3,0.003,10.0,30.0",
        ",TOTAL,6,0.006,,60.0",
    ]


def test_report_registry():
    assert len(REPORTS) == 4
    assert get_report("order_cycle_supplier_totals") is SUPPLIER_TOTALS
    with pytest.raises(ValueError, match="Unknown report"):
        get_report("packing_report")


def test_generate_report_unknown_slug(food_hub, load):
    with pytest.raises(ValueError):
        generate_report(load(food_hub.builder), "bulk_coop")
