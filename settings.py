from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_LOG_LEVEL_ENV = "PLANT_STATS_LOG_LEVEL"
_REPORT_DIR_ENV = "PLANT_STATS_REPORT_DIR"
_REPORT_ENCODING_ENV = "PLANT_STATS_REPORT_ENCODING"
_DATA_ENCODING_ENV = "PLANT_STATS_DATA_ENCODING"


@dataclass(frozen=True)
class Settings:
    log_level: str
    report_dir: Optional[str]
    report_encoding: str
    data_encoding: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        log_level=_read_log_level("WARNING"),
        report_dir=_read_optional_env(_REPORT_DIR_ENV, None),
        report_encoding=_read_str_env(_REPORT_ENCODING_ENV, "utf-8"),
        data_encoding=_read_str_env(_DATA_ENCODING_ENV, "utf-8"),
    )
