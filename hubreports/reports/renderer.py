from __future__ import annotations

import html
from datetime import datetime
from typing import Any, List, Literal, Optional

import numpy as np
import pandas as pd
from pydantic import BaseModel, Field

from ..config import get_config
from ..data.models import ReportOptions
from .grouper import ReportRow
from .templates.base import ReportTemplate


class RenderedRow(BaseModel):
    kind: Literal["data", "summary", "header", "total"]
    cells: List[str] = Field(default_factory=list, description="Formatted cells, one per column")
    label: Optional[str] = Field(default=None, description="Text of a header row")


class ReportTable(BaseModel):
    """A rendered report: upper-cased column labels and formatted rows."""
    title: str = Field(description="Report name")
    keys: List[str] = Field(description="Column keys in display order")
    columns: List[str] = Field(description="Upper-cased column labels")
    rows: List[RenderedRow] = Field(default_factory=list)

    @property
    def body_rows(self) -> List[RenderedRow]:
        return [r for r in self.rows if r.kind != "header"]

    def to_frame(self) -> pd.DataFrame:
        """Data, summary and total rows as a frame; header rows are left out."""
        return pd.DataFrame([r.cells for r in self.body_rows], columns=self.columns)

    def to_csv(self) -> str:
        return self.to_frame().to_csv(index=False)

    def to_html(self) -> str:
        parts = ['<table class="report__table">', "<thead>", "<tr>"]
        parts += [f"<th>{html.escape(c)}</th>" for c in self.columns]
        parts += ["</tr>", "</thead>", "<tbody>"]
        for row in self.rows:
            if row.kind == "header":
                parts.append(
                    f'<tr><td class="header-row" colspan="{len(self.columns)}">{html.escape(row.label or "")}</td></tr>'
                )
                continue
            css = "" if row.kind == "data" else f' class="{row.kind}-row"'
            cells = "".join(f"<td>{html.escape(c)}</td>" for c in row.cells)
            parts.append(f"<tr{css}>{cells}</tr>")
        parts += ["</tbody>", "</table>"]
        return "\n".join(parts)


def format_cell(value: Any, date_format: str = "%Y-%m-%d %H:%M") -> str:
    if value is None:
        return ""
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (int, float)) and pd.isna(value):
        return ""
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, datetime):
        if pd.isna(value):
            return ""
        return value.strftime(date_format)
    return str(value).strip()


class ReportRenderer:
    """Turns grouped rows into a table with the template's visible columns."""

    def __init__(self) -> None:
        self.config = get_config()

    def render(
        self,
        template: ReportTemplate,
        rows: List[ReportRow],
        options: Optional[ReportOptions] = None,
    ) -> ReportTable:
        options = options or ReportOptions()
        columns = template.visible_columns(options)
        rendered = []
        for row in rows:
            if row.kind == "header":
                rendered.append(RenderedRow(kind="header", label=row.label))
                continue
            rendered.append(RenderedRow(
                kind=row.kind,
                cells=[format_cell(row.cells.get(c.key), self.config.date_format) for c in columns],
            ))
        return ReportTable(
            title=template.name,
            keys=[c.key for c in columns],
            columns=[c.label.upper() for c in columns],
            rows=rendered,
        )
