from typing import Dict, List

from .base import Column, GroupingRule, ReportTemplate
from .customer_totals import CUSTOMER_TOTALS
from .supplier_totals import SUPPLIER_TOTALS
from .supplier_totals_by_distributor import SUPPLIER_TOTALS_BY_DISTRIBUTOR
from .distributor_totals_by_supplier import DISTRIBUTOR_TOTALS_BY_SUPPLIER

REPORTS: Dict[str, ReportTemplate] = {
    t.slug: t
    for t in (
        CUSTOMER_TOTALS,
        SUPPLIER_TOTALS,
        SUPPLIER_TOTALS_BY_DISTRIBUTOR,
        DISTRIBUTOR_TOTALS_BY_SUPPLIER,
    )
}


def get_report(slug: str) -> ReportTemplate:
    if slug not in REPORTS:
        raise ValueError(f"Unknown report: {slug}")
    return REPORTS[slug]


def list_reports() -> List[ReportTemplate]:
    return list(REPORTS.values())


__all__ = [
    "Column",
    "GroupingRule",
    "ReportTemplate",
    "CUSTOMER_TOTALS",
    "SUPPLIER_TOTALS",
    "SUPPLIER_TOTALS_BY_DISTRIBUTOR",
    "DISTRIBUTOR_TOTALS_BY_SUPPLIER",
    "REPORTS",
    "get_report",
    "list_reports",
]
