"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from judgesync.cli_commands.snapshot import snapshot
    from judgesync.cli_commands.submit import submit
    from judgesync.cli_commands.watch import watch

    cli.add_command(snapshot)
    cli.add_command(submit)
    cli.add_command(watch)
