from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Sequence

import numpy as np
import pandas as pd
from pydantic import BaseModel, Field

from ..config import get_config
from ..data.frames import frame_records
from ..data.models import ReportOptions
from ..logging import get_logger
from .templates.base import GroupingRule, ReportTemplate

MONEY_COLUMNS = (
    "item", "item_with_fees", "admin_and_handling", "ship", "pay_fee", "total",
    "curr_cost_per_unit", "total_cost", "total_shipping_cost",
)
UNIT_COLUMNS = ("total_units",)


class ReportRow(BaseModel):
    """One output row of a grouped report."""
    kind: Literal["data", "summary", "header", "total"] = Field(description="Row role in the table")
    cells: Dict[str, Any] = Field(default_factory=dict, description="Values keyed by column key")
    label: Optional[str] = Field(default=None, description="Text of a header row")


class ReportGrouper:
    """Collapses, sorts and groups per-line-item rows according to a report template.

    Presentation toggles only add or drop header/summary/total rows; the
    values of data rows do not depend on them.
    """

    def __init__(self) -> None:
        self.config = get_config()
        self.logger = get_logger(__name__)

    def group(
        self,
        lines: pd.DataFrame,
        template: ReportTemplate,
        options: Optional[ReportOptions] = None,
    ) -> List[ReportRow]:
        options = options or ReportOptions()
        if lines.empty:
            return []

        rows = self.collapse(lines, template)
        rows = rows.sort_values(list(template.sort_by), kind="stable", na_position="last").reset_index(drop=True)

        out: List[ReportRow] = []
        self._emit(rows, lines, template, template.rules, options, out)

        if options.display_summary_row and template.grand_total is not None:
            values = template.grand_total(rows, lines, self.config.total_label)
            out.append(ReportRow(kind="total", cells=self._cells(template, values)))

        self.logger.debug(f"{template.slug}: {len(lines)} line items grouped into {len(out)} rows")
        return out

    def collapse(self, lines: pd.DataFrame, template: ReportTemplate) -> pd.DataFrame:
        """Aggregate line rows on the template's key; every line lands in exactly one row."""
        if not template.aggregate_by:
            return lines.copy()
        rows = (
            lines.groupby(list(template.aggregate_by), as_index=False, sort=False, dropna=False)
                 .agg(**template.aggregations)
        )
        if "line_count" in rows.columns and int(rows["line_count"].sum()) != len(lines):
            raise RuntimeError(
                f"{template.slug}: aggregated {int(rows['line_count'].sum())} of {len(lines)} line items"
            )
        return rows

    def _emit(
        self,
        rows: pd.DataFrame,
        lines: pd.DataFrame,
        template: ReportTemplate,
        rules: Sequence[GroupingRule],
        options: ReportOptions,
        out: List[ReportRow],
    ) -> None:
        if not rules:
            for record in frame_records(rows):
                out.append(ReportRow(kind="data", cells=self._cells(template, record)))
            return

        rule, rest = rules[0], rules[1:]
        keys = list(rule.group_by)
        for key, group in rows.groupby(keys, sort=False, dropna=False):
            key = key if isinstance(key, tuple) else (key,)
            group_lines = lines
            for column, value in zip(keys, key):
                group_lines = group_lines[group_lines[column] == value]

            if rule.header_columns and options.display_header_row:
                first = group.iloc[0]
                label = " ".join(str(first[c]) for c in rule.header_columns if pd.notna(first[c]))
                out.append(ReportRow(kind="header", label=label))

            self._emit(group, group_lines, template, rest, options, out)

            if rule.summary is not None and options.display_summary_row:
                values = rule.summary(group, group_lines, self.config.total_label)
                out.append(ReportRow(kind="summary", cells=self._cells(template, values)))

    def _cells(self, template: ReportTemplate, values: Dict[str, Any]) -> Dict[str, Any]:
        cells = {}
        for column in template.columns:
            value = values.get(column.key)
            if isinstance(value, np.generic):
                value = value.item()
            if isinstance(value, float) and not pd.isna(value):
                if column.key in UNIT_COLUMNS:
                    value = round(value, self.config.units_precision)
                elif column.key in MONEY_COLUMNS:
                    value = round(value, self.config.money_precision)
            cells[column.key] = value
        return cells
