from __future__ import annotations

from typing import Iterable

import typer

from models.schemas import StatsReport
from services.report import render_report


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_lines(lines: Iterable[str]) -> None:
    for line in lines:
        typer.echo(line)


def echo_error(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED, err=True)


def render_stats(report: StatsReport) -> None:
    echo_heading("Statistics")
    echo_lines(render_report(report))
