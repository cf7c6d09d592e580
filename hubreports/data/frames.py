from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd


def frame_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Rows of ``df`` as dicts with missing values turned into None."""
    if df.empty:
        return []
    clean = df.astype(object).where(df.notna(), None)
    return [
        {k: (v.item() if isinstance(v, np.generic) else v) for k, v in record.items()}
        for record in clean.to_dict(orient="records")
    ]


def to_naive_timestamp(value: Optional[datetime]) -> Optional[pd.Timestamp]:
    """Normalize a bound to a naive UTC timestamp comparable with loaded columns."""
    if value is None:
        return None
    ts = pd.Timestamp(value)
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts


def match(df: pd.DataFrame, column: str, value) -> pd.DataFrame:
    """Keep rows where ``column`` equals ``value`` (or is in it, for lists)."""
    if value is None:
        return df
    if isinstance(value, (list, tuple, set)):
        if not value:
            return df
        return df[df[column].isin(list(value))]
    return df[(df[column] == value).fillna(False).astype(bool)]
