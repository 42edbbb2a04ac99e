"""``depconstrain format FILE`` — canonical formatting for JSON constraints.

Without ``--check`` the file is rewritten in place.  With ``--check`` the
file is left alone and the patch needed to fix it is printed instead.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.text import Text

from depconstrain.errors import DependencyConstrainError, describe_error
from depconstrain.serialize.json_reader import format_constraints_file, formatting_patch

console = Console()


def format_cmd(
    file: Path = typer.Argument(
        ...,
        help="The constraints.json file to format.",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    check: bool = typer.Option(
        False,
        "--check",
        help="Only report formatting differences; exit 1 if there are any.",
    ),
) -> None:
    """Rewrite FILE in canonical JSON form, or verify it with --check."""
    try:
        if check:
            patch = formatting_patch(file.read_bytes().decode("utf-8"), file_label=file.name)
            if patch:
                console.print(f"[yellow]Not formatted correctly:[/yellow] {file}")
                console.print(Syntax("\n".join(patch), "diff", theme="ansi_dark"))
                raise typer.Exit(code=1)
            console.print(f"[green]Formatted correctly:[/green] {file}")
            return

        changed = format_constraints_file(file)
    except DependencyConstrainError as exc:
        console.print(Text(describe_error(exc)))
        raise typer.Exit(code=1)

    if changed:
        console.print(f"[green]Reformatted[/green] {file}")
    else:
        console.print(f"[dim]Already formatted:[/dim] {file}")
