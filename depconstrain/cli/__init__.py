"""depconstrain CLI — Typer-based command-line interface.

Provides the ``depconstrain`` command with subcommands for checking a
constraints directory and for rewriting a JSON constraints file into its
canonical formatting.

All output uses Rich for formatted terminal display.
"""
