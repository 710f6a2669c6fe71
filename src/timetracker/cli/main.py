from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer

from ..store.records import build_criteria, find_task_files
from ..utils.duration import format_duration
from ..utils.time import end_of_day, normalize, pretty_date
from .base import configure_logging, get_logger, handle_errors, warning_message
from .commands.projects import projects_command

configure_logging()
logger = get_logger(__name__)

app = typer.Typer(
    help="Track time spent on projects from the commandline",
    context_settings={"help_option_names": ["-h", "--help"]},
)

HomeOption = Annotated[
    Path | None,
    typer.Option(
        "--home",
        help="Tracker home directory (defaults to $TRACKER_HOME or ~/.TimeTracker)",
        file_okay=False,
    ),
]


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Log debug output to stderr"),
    ] = False,
) -> None:
    """Track time spent on projects from the commandline."""
    if verbose:
        configure_logging(logging.DEBUG)


@app.command("files")
def files(
    start: Annotated[
        str | None,
        typer.Option("--from", help="Start of the time window (e.g. '2020-01-02', '13:42')"),
    ] = None,
    end: Annotated[
        str | None,
        typer.Option("--to", help="End of the time window; defaults to now"),
    ] = None,
    projects: Annotated[
        list[str] | None,
        typer.Option("-p", "--project", help="Only records of this project [multiple]"),
    ] = None,
    tags: Annotated[
        list[str] | None,
        typer.Option("-t", "--tag", help="Only records containing this tag [multiple]"),
    ] = None,
    home: HomeOption = None,
) -> None:
    """List task record files matching a time window, projects and tags."""
    with handle_errors("files", logger=logger):
        criteria = build_criteria(
            start=start,
            end=end,
            projects=projects or (),
            tags=tags or (),
        )
        records = find_task_files(home, criteria)

    if not records:
        warning_message("No task files found")
    for record in records:
        typer.echo(str(record.path))


@app.command("projects")
def projects(
    home: HomeOption = None,
    show_paths: Annotated[
        bool,
        typer.Option("--paths", help="Show the mapped path of each project"),
    ] = False,
) -> None:
    """Display configured projects as a tree."""
    projects_command(home=home, show_paths=show_paths)


@app.command("when")
def when(
    raw: Annotated[str, typer.Argument(help="Date string to resolve")],
    eod: Annotated[
        bool,
        typer.Option("--end-of-day", help="Round a midnight result up to 23:59:59"),
    ] = False,
) -> None:
    """Show how a date string is resolved."""
    with handle_errors("when", logger=logger):
        resolved = normalize(raw)
    if eod:
        resolved = end_of_day(resolved)
    typer.echo(f"{resolved.isoformat(sep=' ')} ({pretty_date(resolved)})")


@app.command("duration")
def duration(
    seconds: Annotated[int, typer.Argument(min=0, help="Number of seconds")],
) -> None:
    """Format a number of seconds as H:MM:SS."""
    typer.echo(format_duration(seconds))


def main() -> None:
    """Main entry point for package CLI.

    Invokes the Typer application, which handles command parsing and
    execution.

    Side Effects:
        - Processes CLI arguments and executes commands.
        - May exit with non-zero code on errors.
    """
    app()


if __name__ == "__main__":
    main()
