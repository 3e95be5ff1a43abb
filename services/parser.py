"""Line parsing for power output data files."""

from __future__ import annotations

import logging
import math
import re
from typing import Iterable, List

from models.errors import ParseError
from models.records import Reading

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = " "
FIELD_COUNT = 4

_INTEGER_RE = re.compile(r"\d+")
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_line(line: str, line_number: int = 1) -> Reading:
    """Parse ``<month> <day> <year> <output>`` into a :class:`Reading`."""
    content = line.rstrip("\r\n")
    parts = content.split(FIELD_SEPARATOR)
    if len(parts) != FIELD_COUNT:
        raise ParseError(
            line_number, content, f"expected {FIELD_COUNT} fields, found {len(parts)}"
        )

    month, day_raw, year_raw, output_raw = parts
    if not month:
        raise ParseError(line_number, content, "missing month")
    if not _INTEGER_RE.fullmatch(day_raw):
        raise ParseError(line_number, content, "invalid day")
    if not _INTEGER_RE.fullmatch(year_raw):
        raise ParseError(line_number, content, "invalid year")
    if not _DECIMAL_RE.fullmatch(output_raw):
        raise ParseError(line_number, content, "invalid numeric output")

    output = float(output_raw)
    if not math.isfinite(output):
        raise ParseError(line_number, content, "output out of range")

    return Reading(month=month, day=int(day_raw), year=int(year_raw), output=output)


def parse_lines(lines: Iterable[str]) -> List[Reading]:
    """Parse every line, failing on the first malformed one."""
    readings: List[Reading] = []
    for line_number, line in enumerate(lines, start=1):
        try:
            readings.append(parse_line(line, line_number))
        except ParseError as exc:
            logger.warning(
                "Rejecting data file at malformed line",
                extra={"line_number": exc.line_number, "reason": exc.reason},
            )
            raise
    return readings
