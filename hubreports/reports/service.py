from __future__ import annotations

from typing import Optional

from ..config import get_config
from ..data.interface import DataAccess
from ..data.models import ReportFilters, ReportOptions
from ..logging import get_logger
from .aggregator import OrderLineAggregator
from .grouper import ReportGrouper
from .renderer import ReportRenderer, ReportTable
from .templates import get_report


def default_options() -> ReportOptions:
    config = get_config()
    return ReportOptions(
        display_summary_row=config.default_display_summary_row,
        display_header_row=config.default_display_header_row,
    )


def generate_report(
    data_access: DataAccess,
    slug: str,
    filters: Optional[ReportFilters] = None,
    options: Optional[ReportOptions] = None,
) -> ReportTable:
    """Run one report end to end: filter, flatten, group and render.

    Raises:
        ValueError: If ``slug`` does not name a report.
    """
    logger = get_logger(__name__)
    template = get_report(slug)
    filters = filters or ReportFilters()
    options = options or default_options()

    logger.info(f"Generating {template.name} with filters {filters.model_dump(exclude_none=True)}")
    lines = OrderLineAggregator(data_access).rows(filters)
    rows = ReportGrouper().group(lines, template, options)
    return ReportRenderer().render(template, rows, options)
