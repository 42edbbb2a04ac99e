"""Main Typer application — imports and registers all CLI commands.

Entry point: ``depconstrain`` (configured via pyproject.toml console_scripts).
"""

from __future__ import annotations

import typer

from depconstrain.cli.commands.check import check_cmd
from depconstrain.cli.commands.format_cmd import format_cmd

app = typer.Typer(
    name="depconstrain",
    help="depconstrain: load and validate dependency version constraint files.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="check", help="Load and validate the constraints file in a directory.")(check_cmd)
app.command(name="format", help="Rewrite a JSON constraints file in canonical form.")(format_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
