"""``depconstrain check DIRECTORY`` — load and validate a constraints directory.

Loads ``constraints.json`` or ``constraints.xml`` exactly the way a build
would, then prints the constraints as a table.  Any violation is printed
with its full cause chain and the command exits with code 1.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from depconstrain.cli.logging_setup import configure_logging
from depconstrain.config import ConstrainSettings
from depconstrain.errors import DependencyConstrainError, describe_error
from depconstrain.models.constraint_set import ConstraintSet
from depconstrain.serialize.loader import find_constraints_file, read_constraints_file

console = Console()


def _constraints_table(constraints: ConstraintSet, title: str) -> Table:
    table = Table(title=Text(title))
    table.add_column("Group", style="cyan")
    table.add_column("Name", style="cyan")
    table.add_column("Version", style="green")
    table.add_column("Rejected")
    table.add_column("Reason", style="dim")
    for c in constraints.constraints:
        table.add_row(
            Text(c.group),
            Text(c.name),
            Text(c.suggested_version),
            Text(", ".join(c.rejected_versions) or "-"),
            Text(c.reason),
        )
    return table


def check_cmd(
    directory: Path = typer.Argument(
        ...,
        help="Directory holding constraints.json or constraints.xml.",
        file_okay=False,
        dir_okay=True,
    ),
    strict: Optional[bool] = typer.Option(
        None,
        "--strict/--no-strict",
        help="Require XML constraints sorted by group:name:suggestedVersion "
        "(defaults to DEPCONSTRAIN_STRICT_SORT).",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to DEPCONSTRAIN_LOG_LEVEL).",
    ),
) -> None:
    """Load the constraints file in DIRECTORY and report any violation."""
    overrides = {} if strict is None else {"strict_sort": strict}
    settings = ConstrainSettings(**overrides)
    try:
        configure_logging(log_level or settings.log_level)
    except ValueError as exc:
        console.print(Text(f"Invalid log level: {exc}"))
        raise typer.Exit(code=1)

    if not directory.is_dir():
        console.print(f"[bold red]Directory not found:[/bold red] {directory}")
        raise typer.Exit(code=1)

    try:
        path = find_constraints_file(directory, settings)
        constraints = (
            read_constraints_file(path, settings) if path is not None else ConstraintSet.empty()
        )
    except DependencyConstrainError as exc:
        console.print(
            Panel(Text(describe_error(exc)), title="[bold red]Invalid constraints[/bold red]", expand=False)
        )
        raise typer.Exit(code=1)

    if path is None:
        console.print(f"[dim]No constraints file in {directory}.[/dim]")
        return

    console.print(_constraints_table(constraints, title=str(path)))
    console.print(f"[bold green]{len(constraints)} constraint(s) OK[/bold green]")
