"""Error types raised while loading and reporting on readings."""

from __future__ import annotations


class PlantDataError(Exception):
    """Base class for errors surfaced to the user."""


class ParseError(PlantDataError, ValueError):
    """A line of the data file could not be turned into a reading."""

    def __init__(self, line_number: int, line: str, reason: str) -> None:
        super().__init__(f"Line {line_number} {reason}: {line!r}")
        self.line_number = line_number
        self.line = line
        self.reason = reason


class EmptyStoreError(PlantDataError):
    """The operation needs at least one reading."""

    def __init__(self, message: str = "No entries, aborting.") -> None:
        super().__init__(message)


class UnreadableFileError(PlantDataError):
    """The data file is not text in the expected encoding."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason
