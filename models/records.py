"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class Reading:
    """A single dated power output reading parsed from a data file."""

    month: str
    day: int
    year: int
    output: float

    def replace(self, **changes: Any) -> Reading:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def format_line(self) -> str:
        return f"Date: {self.month} {self.day}, {self.year} Output: {self.output!r}"


def output_key(reading: Reading) -> float:
    return reading.output
