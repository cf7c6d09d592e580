import time
from datetime import datetime, time as dt_time, timedelta

import streamlit as st

# Configuration
from hubreports.config import get_config
from hubreports.logging import get_logger

# DataAccess interface + CSV implementation
from hubreports.data.util import get_data_access
from hubreports.data.models import ReportFilters, ReportOptions
from hubreports.reports.service import generate_report
from hubreports.reports.templates import list_reports

st.set_page_config(page_title="Orders and Fulfillment Reports", layout="wide")

config = get_config()
logger = get_logger(__name__)
da = get_data_access("csv")

# -----------------------------------------------------------------------------
# Sidebar filters (all choices sourced via the DataAccess layer)
# -----------------------------------------------------------------------------
st.sidebar.header("Report")

reports = list_reports()
report = st.sidebar.radio("Report type", reports, format_func=lambda t: t.name)
st.sidebar.caption(report.description)

st.sidebar.header("Filters")

bounds = da.get_date_bounds()
default_end = (bounds.end_ts if bounds else datetime.now()) + timedelta(minutes=1)
default_start = bounds.start_ts if bounds else default_end - timedelta(days=config.default_seed_days)

c1, c2 = st.sidebar.columns(2)
start_date = c1.date_input("Completed after", default_start.date())
start_time = c2.time_input("at", dt_time(0, 0), key="start_time")
c3, c4 = st.sidebar.columns(2)
end_date = c3.date_input("Completed before", default_end.date())
end_time = c4.time_input("at", default_end.time().replace(second=0, microsecond=0), key="end_time")

order_cycles = da.list_order_cycles()
cycle_sel = st.sidebar.multiselect("Order cycles", order_cycles, format_func=lambda oc: oc.label)

hubs = da.list_distributors().values
hub_sel = st.sidebar.multiselect("Hubs", hubs, format_func=lambda o: o.name)

producers = da.list_suppliers().values
producer_sel = st.sidebar.multiselect("Producers", producers, format_func=lambda o: o.name)

display_summary_row = st.sidebar.checkbox(
    "Display summary row", value=config.default_display_summary_row, key="display_summary_row"
)
display_header_row = st.sidebar.checkbox(
    "Display header row", value=config.default_display_header_row, key="display_header_row"
)

# Normalize filters for the backend
filters = ReportFilters(
    completed_at_gt=datetime.combine(start_date, start_time),
    completed_at_lt=datetime.combine(end_date, end_time),
    order_cycle_id=[oc.order_cycle_id for oc in cycle_sel] or None,
    distributor_id=[o.id for o in hub_sel] or None,
    supplier_id=[o.id for o in producer_sel] or None,
)
options = ReportOptions(display_summary_row=display_summary_row, display_header_row=display_header_row)

# -----------------------------------------------------------------------------
# Report
# -----------------------------------------------------------------------------
st.markdown(f"### {report.name}")

if st.sidebar.button("Go", type="primary"):
    t0 = time.perf_counter()
    table = generate_report(da, report.slug, filters, options)
    t_report = (time.perf_counter() - t0) * 1000.0
    logger.info(f"{report.slug} rendered {len(table.rows)} rows in {t_report:.1f} ms")

    if not table.rows:
        st.info("No orders match the selected filters.")
    st.markdown(table.to_html(), unsafe_allow_html=True)
    st.download_button(
        "Download CSV",
        table.to_csv(),
        file_name=f"{report.slug}.csv",
        mime="text/csv",
    )

    with st.expander("Query timings (ms)"):
        st.write({"generate_report": round(t_report, 2)})
else:
    st.caption("Choose filters and press Go.")

# -----------------------------------------------------------------------------
# Footer
# -----------------------------------------------------------------------------
with st.expander("Data source"):
    st.write(
        f"Reports read orders, line items and vouchers via a **DataAccess** interface "
        f"(CSV-backed) from `{config.data_dir}/`."
    )
