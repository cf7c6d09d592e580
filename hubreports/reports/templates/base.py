from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

import pandas as pd

from ...data.models import ReportOptions

# summary(rows, lines, label): ``rows`` are the (possibly aggregated) rows of the
# group, ``lines`` the per-line-item rows behind them.
SummaryFn = Callable[[pd.DataFrame, pd.DataFrame, str], Dict[str, Any]]


@dataclass(frozen=True)
class Column:
    key: str
    label: str


@dataclass(frozen=True)
class GroupingRule:
    """One level of grouping.

    ``header_columns`` are rendered once above the group when header rows are
    displayed, and are dropped from the table columns in that mode.
    """
    group_by: Tuple[str, ...]
    header_columns: Tuple[str, ...] = ()
    summary: Optional[SummaryFn] = None


@dataclass(frozen=True, eq=False)
class ReportTemplate:
    slug: str
    name: str
    description: str
    columns: Tuple[Column, ...]
    sort_by: Tuple[str, ...]
    # When set, line rows are collapsed on these keys using ``aggregations``
    # (pandas named aggregations).
    aggregate_by: Tuple[str, ...] = ()
    aggregations: Dict[str, Tuple[str, Any]] = field(default_factory=dict)
    rules: Tuple[GroupingRule, ...] = ()
    grand_total: Optional[SummaryFn] = None

    def visible_columns(self, options: ReportOptions) -> List[Column]:
        hidden = set()
        if options.display_header_row:
            for rule in self.rules:
                hidden.update(rule.header_columns)
        return [c for c in self.columns if c.key not in hidden]


def sum_or_blank(values: pd.Series):
    """Sum that stays blank (NaN) when any value is missing."""
    return values.sum(skipna=False)


def distinct_join(values: pd.Series) -> str:
    return ", ".join(sorted({str(v) for v in values.dropna()}))


# Named aggregations shared by the supplier/distributor reports
COST_AGGREGATIONS: Dict[str, Tuple[str, Any]] = {
    "quantity": ("quantity", "sum"),
    "total_units": ("total_units", sum_or_blank),
    "curr_cost_per_unit": ("curr_cost_per_unit", "first"),
    "total_cost": ("total_cost", sum_or_blank),
    "shipping_method": ("shipping_method", distinct_join),
    "line_count": ("line_item_id", "count"),
}
