from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class NamedOption(BaseModel):
    """Id/label pair used to populate dropdowns."""
    id: int = Field(description="Identifier submitted with the form")
    name: str = Field(description="Human readable label")


class OptionList(BaseModel):
    """Generic container for dropdown options."""
    values: List[NamedOption] = Field(description="Options sorted by name")

    @property
    def ids(self) -> List[int]:
        return [v.id for v in self.values]


class DateBounds(BaseModel):
    """Response model for date bounds data."""
    start_ts: datetime = Field(description="Start timestamp")
    end_ts: datetime = Field(description="End timestamp")
