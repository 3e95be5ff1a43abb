"""Pydantic schemas describing derived statistics."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from models.records import Reading


class StatsReport(BaseModel):
    """Everything written to a stats report, in report order."""

    readings: List[Reading] = Field(..., min_length=1, description="Readings sorted by output.")
    highest: Reading
    monthly_totals: Dict[str, float] = Field(default_factory=dict)
    average_output: Optional[float] = None

    @property
    def row_count(self) -> int:
        return len(self.readings)
