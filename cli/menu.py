"""Interactive menu driving a :class:`ReadingStore`."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Callable, Optional, TextIO

import typer

from datastore.reading_store import ReadingStore
from models.errors import PlantDataError
from services.report import StatsReportWriter

logger = logging.getLogger(__name__)


class MenuChoice(IntEnum):
    EXIT = 0
    UPLOAD = 1
    VIEW = 2
    DOWNLOAD_STATS = 3
    PRINT_MONTH = 4


MENU_LINES = (
    "1. Upload Data",
    "2. View Data",
    "3. Download Statistics",
    "4. Print Month",
    "0. Exit Program",
)


class MenuLoop:
    """Reads selections from ``stream`` until the user picks Exit.

    Input is consumed one line at a time. End of input raises ``EOFError``
    since the loop cannot make progress without it.
    """

    def __init__(
        self,
        store: ReadingStore,
        stream: TextIO,
        writer: Optional[StatsReportWriter] = None,
        echo: Callable[..., None] = typer.echo,
    ) -> None:
        self.store = store
        self.stream = stream
        self.writer = writer or StatsReportWriter()
        self.echo = echo

    def run(self) -> None:
        while True:
            choice = self.read_selection()
            logger.debug("Menu selection", extra={"selection": choice.name.lower()})
            if choice is MenuChoice.EXIT:
                return
            try:
                self.dispatch(choice)
            except (PlantDataError, OSError) as exc:
                self.echo(str(exc))

    def dispatch(self, choice: MenuChoice) -> None:
        if choice is MenuChoice.UPLOAD:
            self.upload()
        elif choice is MenuChoice.VIEW:
            self.view()
        elif choice is MenuChoice.DOWNLOAD_STATS:
            self.download_stats()
        elif choice is MenuChoice.PRINT_MONTH:
            self.print_month()

    def read_selection(self) -> MenuChoice:
        while True:
            for line in MENU_LINES:
                self.echo(line)
            raw = self._read_line()
            while not _is_integer(raw):
                self.echo("Enter a number")
                raw = self._read_line()
            selection = int(raw)
            if MenuChoice.EXIT <= selection <= MenuChoice.PRINT_MONTH:
                return MenuChoice(selection)

    def upload(self) -> None:
        self.echo("Enter a file name: ", nl=False)
        file_name = self._read_line()
        count = self.store.load_from_file(file_name)
        self.echo(f"uploaded {count}")

    def view(self) -> None:
        for line in self.store.list_all():
            self.echo(line)

    def download_stats(self) -> None:
        if not len(self.store):
            self.echo("No entries, aborting.")
            return
        self.echo(f"data file name: {self.store.source_path}")
        path = self.writer.write(self.store)
        self.echo(f"wrote to {path}")

    def print_month(self) -> None:
        self.echo("Enter a month:")
        month = self._read_line()
        for line in self.store.list_by_month(month):
            self.echo(line)

    def _read_line(self) -> str:
        line = self.stream.readline()
        if not line:
            raise EOFError("Input stream closed.")
        return line.rstrip("\r\n")


def _is_integer(value: str) -> bool:
    candidate = value.strip()
    if candidate[:1] in {"+", "-"}:
        candidate = candidate[1:]
    return candidate.isdecimal()
