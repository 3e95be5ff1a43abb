"""Aggregation logic for power output readings."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from models.errors import EmptyStoreError
from models.records import Reading, output_key
from models.schemas import StatsReport


def sorted_by_output(readings: Iterable[Reading]) -> List[Reading]:
    """Return a new list ordered by output, ties kept in input order."""
    return sorted(readings, key=output_key)


def totals_by_month(readings: Iterable[Reading]) -> Dict[str, float]:
    totals: Dict[str, float] = {}
    for reading in readings:
        total = totals.get(reading.month)
        if total is None:
            totals[reading.month] = reading.output
        else:
            totals[reading.month] = total + reading.output
    return totals


def average_output(readings: Iterable[Reading]) -> Optional[float]:
    """Arithmetic mean of outputs, or ``None`` when there is nothing to average."""
    count = 0
    total = 0.0
    for reading in readings:
        count += 1
        total += reading.output
    if not count:
        return None
    return total / count


class Aggregator:
    """Pure aggregation component that can be unit tested in isolation."""

    def summarize(self, readings: Iterable[Reading]) -> StatsReport:
        items = list(readings)
        if not items:
            raise EmptyStoreError()

        ordered = sorted_by_output(items)
        return StatsReport(
            readings=ordered,
            highest=ordered[-1],
            monthly_totals=totals_by_month(items),
            average_output=average_output(items),
        )
