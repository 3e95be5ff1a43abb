from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from cli.menu import MenuLoop
from cli.render import echo_error, echo_lines, render_stats
from datastore.reading_store import ReadingStore
from logging_config import configure_logging
from models.errors import PlantDataError
from services.report import StatsReportWriter


@dataclass
class CLIState:
    store: ReadingStore
    writer: StatsReportWriter


app = typer.Typer(
    help="Browse power plant output readings and write statistics reports.",
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


def _load(state: CLIState, file: Path) -> None:
    try:
        state.store.load_from_file(file)
    except (PlantDataError, OSError) as exc:
        echo_error(str(exc))
        raise typer.Exit(code=1) from exc


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Logging level (defaults to PLANT_STATS_LOG_LEVEL env or WARNING).",
    ),
) -> None:
    """Entry point for the CLI; runs the interactive menu when no command is given."""
    try:
        configure_logging(log_level)
    except ValueError as exc:
        echo_error(str(exc))
        raise typer.Exit(code=1) from exc
    ctx.obj = CLIState(store=ReadingStore(), writer=StatsReportWriter())
    if ctx.invoked_subcommand is None:
        menu_command(ctx)


@app.command("menu")
def menu_command(ctx: typer.Context) -> None:
    """Run the interactive upload/view/stats menu."""
    state = _get_state(ctx)
    loop = MenuLoop(store=state.store, stream=sys.stdin, writer=state.writer)
    try:
        loop.run()
    except EOFError as exc:
        echo_error("Input closed before Exit was selected.")
        raise typer.Exit(code=1) from exc


@app.command("view")
def view_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Path to data file."),
    month: Optional[str] = typer.Option(
        None,
        "--month",
        "-m",
        help="Only show readings for this month (case-sensitive).",
    ),
) -> None:
    """Print readings from a data file in file order."""
    state = _get_state(ctx)
    _load(state, file)
    lines = state.store.list_all() if month is None else state.store.list_by_month(month)
    echo_lines(lines)


@app.command("stats")
def stats_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Path to data file."),
    as_json: bool = typer.Option(
        False,
        "--json/--no-json",
        help="Also print the computed statistics as JSON.",
    ),
) -> None:
    """Write the stats report for a data file."""
    state = _get_state(ctx)
    _load(state, file)
    try:
        report = state.writer.build(state.store)
        path = state.writer.write_report(report, state.store.source_path)
    except (PlantDataError, OSError) as exc:
        echo_error(str(exc))
        raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(report.model_dump_json(indent=2))
    else:
        render_stats(report)
    typer.secho(f"wrote to {path}", fg=typer.colors.GREEN)
