from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Iterator

import pytest

from datastore.reading_store import ReadingStore
from models.errors import EmptyStoreError
from services import report as report_module
from services.report import StatsReportWriter, derive_report_name
from settings import get_settings


@pytest.fixture(autouse=True)
def _default_settings(monkeypatch) -> Iterator[None]:
    for name in ("PLANT_STATS_REPORT_DIR", "PLANT_STATS_REPORT_ENCODING", "PLANT_STATS_DATA_ENCODING"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


EXAMPLE_DATA = "January 5 2023 120.5\nJanuary 10 2023 80.0\nFebruary 1 2023 200.0\n"


@pytest.fixture()
def loaded_store(tmp_path: Path) -> ReadingStore:
    path = tmp_path / "data.txt"
    path.write_text(EXAMPLE_DATA)
    store = ReadingStore()
    store.load_from_file(path)
    return store


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("data.txt", "data_stats.txt"),
        ("plant.2023.txt", "plant_stats.txt"),
        ("readings", "readings_stats.txt"),
        ("some.dir/data.txt", "data_stats.txt"),
        (".hidden", ".hidden_stats.txt"),
        (".hidden.txt", ".hidden_stats.txt"),
    ],
)
def test_derive_report_name(source: str, expected: str) -> None:
    assert derive_report_name(source) == expected


def test_write_report_contents(loaded_store: ReadingStore, tmp_path: Path) -> None:
    writer = StatsReportWriter()

    path = writer.write(loaded_store)

    assert path == tmp_path / "data_stats.txt"
    assert path.read_text(encoding="utf-8").splitlines() == [
        "Date: January 10, 2023 Output: 80.0",
        "Date: January 5, 2023 Output: 120.5",
        "Date: February 1, 2023 Output: 200.0",
        "Highest Output on February 1, 2023",
        "Total for January: 200.5",
        "Total for February: 200.0",
        "Average ouput: 133.5",
    ]
    assert path.read_text(encoding="utf-8").endswith("\n")


def test_write_report_to_configured_directory(loaded_store: ReadingStore, tmp_path: Path) -> None:
    target = tmp_path / "reports"
    writer = StatsReportWriter(report_dir=target)

    path = writer.write(loaded_store)

    assert path == target / "data_stats.txt"
    assert path.exists()


def test_write_report_empty_store_writes_nothing(tmp_path: Path) -> None:
    writer = StatsReportWriter(report_dir=tmp_path)

    with pytest.raises(EmptyStoreError):
        writer.write(ReadingStore())

    assert list(tmp_path.iterdir()) == []


def test_failed_replace_leaves_no_partial_file(
    loaded_store: ReadingStore, tmp_path: Path, monkeypatch
) -> None:
    def failing_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(report_module.os, "replace", failing_replace)
    writer = StatsReportWriter()

    with pytest.raises(OSError, match="disk full"):
        writer.write(loaded_store)

    assert sorted(p.name for p in tmp_path.iterdir()) == ["data.txt"]


def test_write_overwrites_previous_report(loaded_store: ReadingStore, tmp_path: Path) -> None:
    stale = tmp_path / "data_stats.txt"
    stale.write_text("stale\n")

    StatsReportWriter().write(loaded_store)

    assert "stale" not in stale.read_text()


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_report_mode_follows_umask(loaded_store: ReadingStore) -> None:
    previous = os.umask(0o022)
    try:
        path = StatsReportWriter().write(loaded_store)
    finally:
        os.umask(previous)

    assert stat.S_IMODE(path.stat().st_mode) == 0o644
