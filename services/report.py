"""Stats report rendering and file output."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import TYPE_CHECKING, List, Optional, Union

from models.errors import EmptyStoreError
from models.schemas import StatsReport
from services.aggregator import Aggregator
from settings import get_settings

if TYPE_CHECKING:
    from datastore.reading_store import ReadingStore

logger = logging.getLogger(__name__)

REPORT_SUFFIX = "_stats.txt"
# Misspelling is part of the report format consumers match on.
AVERAGE_LABEL = "Average ouput"


def derive_report_name(source: Union[str, Path]) -> str:
    """``data.txt`` -> ``data_stats.txt``; only the file name is considered.

    Leading dots belong to the base, so ``.hidden.txt`` -> ``.hidden_stats.txt``.
    """
    name = Path(source).name
    stem = name.lstrip(".")
    dots = name[: len(name) - len(stem)]
    base = dots + stem.split(".", 1)[0] if stem else name
    return f"{base}{REPORT_SUFFIX}"


def render_report(report: StatsReport) -> List[str]:
    lines = [reading.format_line() for reading in report.readings]
    highest = report.highest
    lines.append(f"Highest Output on {highest.month} {highest.day}, {highest.year}")
    for month, total in report.monthly_totals.items():
        lines.append(f"Total for {month}: {total!r}")
    if report.average_output is not None:
        lines.append(f"{AVERAGE_LABEL}: {report.average_output!r}")
    return lines


class StatsReportWriter:
    """Writes the stats report for a store next to its source file."""

    def __init__(
        self,
        aggregator: Optional[Aggregator] = None,
        report_dir: Optional[Path] = None,
        encoding: Optional[str] = None,
    ) -> None:
        settings = get_settings()
        self.aggregator = aggregator or Aggregator()
        if report_dir is None and settings.report_dir:
            report_dir = Path(settings.report_dir)
        self.report_dir = report_dir
        self.encoding = encoding or settings.report_encoding

    def report_path(self, source: Union[str, Path]) -> Path:
        directory = self.report_dir if self.report_dir is not None else Path(source).parent
        return directory / derive_report_name(source)

    def build(self, store: ReadingStore) -> StatsReport:
        if not len(store):
            raise EmptyStoreError()
        return self.aggregator.summarize(store)

    def write(self, store: ReadingStore) -> Path:
        """Write the report for ``store`` and return its path."""
        report = self.build(store)
        return self.write_report(report, store.source_path)

    def write_report(self, report: StatsReport, source: Union[str, Path, None]) -> Path:
        if source is None:
            raise EmptyStoreError()
        path = self.report_path(source)
        self._write_atomic(path, render_report(report))
        logger.info(
            "Wrote stats report",
            extra={
                "source_path": str(source),
                "report_path": str(path),
                "record_count": report.row_count,
            },
        )
        return path

    def _write_atomic(self, path: Path, lines: List[str]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            "w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            encoding=self.encoding,
            newline="\n",
            delete=False,
        ) as tmp:
            temp_name = tmp.name
            try:
                for line in lines:
                    tmp.write(line)
                    tmp.write("\n")
                tmp.flush()
                os.fsync(tmp.fileno())
            except BaseException:
                tmp.close()
                os.unlink(temp_name)
                raise
        try:
            os.chmod(temp_name, _default_file_mode())
            os.replace(temp_name, path)
        except OSError:
            os.unlink(temp_name)
            raise


def _default_file_mode() -> int:
    """Mode a plain ``open(path, "w")`` would give under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask
