from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from models.errors import UnreadableFileError
from models.records import Reading
from services import aggregator
from services.parser import parse_lines
from settings import get_settings

logger = logging.getLogger(__name__)


class ReadingStore:
    """In-memory readings in upload order, plus the file they came from."""

    def __init__(self) -> None:
        self._readings: List[Reading] = []
        self.source_path: Optional[Path] = None

    def __len__(self) -> int:
        return len(self._readings)

    def __iter__(self) -> Iterator[Reading]:
        return iter(self._readings)

    @property
    def readings(self) -> List[Reading]:
        return list(self._readings)

    def load_from_file(self, path: Union[str, Path], encoding: Optional[str] = None) -> int:
        """Append every reading in ``path`` and return how many were added.

        The whole file is parsed before anything is appended, so a malformed
        line leaves the store and the remembered source path untouched.
        """
        source = Path(path)
        encoding = encoding or get_settings().data_encoding
        try:
            with source.open("r", encoding=encoding) as handle:
                parsed = parse_lines(handle)
        except UnicodeDecodeError as exc:
            logger.warning(
                "Rejecting undecodable data file",
                extra={"source_path": str(source), "reason": exc.reason},
            )
            raise UnreadableFileError(str(source), f"not {exc.encoding} text") from exc

        self._readings.extend(parsed)
        self.source_path = source
        logger.info(
            "Loaded readings",
            extra={
                "source_path": str(source),
                "record_count": len(parsed),
                "store_size": len(self._readings),
            },
        )
        return len(parsed)

    def list_all(self) -> List[str]:
        return [reading.format_line() for reading in self._readings]

    def list_by_month(self, month: str) -> List[str]:
        lines = [reading.format_line() for reading in self._readings if reading.month == month]
        if not lines:
            logger.debug("No readings matched month", extra={"month": month})
            return [f"No entries for {month}"]
        return lines

    def months(self) -> List[str]:
        return list(dict.fromkeys(reading.month for reading in self._readings))

    def sorted_by_output(self) -> List[Reading]:
        return aggregator.sorted_by_output(self._readings)

    def totals_by_month(self) -> Dict[str, float]:
        return aggregator.totals_by_month(self._readings)

    def average_output(self) -> Optional[float]:
        return aggregator.average_output(self._readings)
