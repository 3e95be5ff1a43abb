from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Iterable, TextIO

from settings import get_settings

CONTEXT_KEYS = (
    "source_path",
    "line_number",
    "reason",
    "record_count",
    "store_size",
    "report_path",
    "month",
    "selection",
)

_configured = False


class ContextualFormatter(logging.Formatter):
    """Appends ``key=value`` for every context key passed through ``extra``."""

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        context_keys: Iterable[str] = CONTEXT_KEYS,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.context_keys = tuple(context_keys)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = " ".join(
            f"{key}={_context_value(value)}"
            for key in self.context_keys
            if (value := record.__dict__.get(key)) is not None
        )
        return f"{message} | {context}" if context else message


def _context_value(value: object) -> str:
    text = str(value)
    if not text or any(char.isspace() for char in text):
        return repr(text)
    return text


def resolve_level(level: str | int) -> int:
    """Turn ``"info"``/``20`` into a logging level, rejecting unknown names."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(level: str | int | None = None, stream: TextIO | None = None) -> None:
    """Configure logging once per process; later calls are ignored."""
    global _configured
    if _configured:
        return

    log_level = resolve_level(level if level is not None else get_settings().log_level)
    handler: dict[str, object] = {
        "class": "logging.StreamHandler",
        "level": log_level,
        "formatter": "contextual",
    }
    handler["stream"] = stream if stream is not None else "ext://sys.stderr"

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "contextual": {
                    "()": ContextualFormatter,
                    "fmt": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                }
            },
            "handlers": {"default": handler},
            "root": {"handlers": ["default"], "level": log_level},
        }
    )

    _configured = True
