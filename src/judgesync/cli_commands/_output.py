"""Shared CLI output formatters and settings resolution."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click
from rich.console import Console
from rich.table import Table

from judgesync.sdk.errors import SettingsValidationError
from judgesync.sdk.settings import SettingsLoader, build_settings

if TYPE_CHECKING:
    from judgesync.core.sync.session import EditorSession
    from judgesync.protocols.models import SubmissionReceipt
    from judgesync.sdk.models import SyncSettings

console = Console()


def resolve_settings(ctx: click.Context) -> SyncSettings:
    """Build settings from the root group's options; exit 1 when invalid."""
    obj: dict[str, Any] = ctx.find_root().obj or {}
    overrides = {k: v for k, v in obj.get("overrides", {}).items() if v is not None}
    config = obj.get("config")

    try:
        if config:
            return SettingsLoader(Path(config)).load(**overrides)
        return build_settings(overrides)
    except SettingsValidationError as exc:
        console.print(f"[red]Settings error:[/red] {exc}")
        sys.exit(1)


def print_receipt(receipt: SubmissionReceipt) -> None:
    console.print(f"[green]Submitted.[/green] Submission id: [bold]{receipt.id}[/bold]")
    console.print(f"  Status: {receipt.status}")


def print_session_status(session: EditorSession) -> None:
    """Pretty-print the persistence state of a session's buffer."""
    table = Table(title="Buffer")
    table.add_column("Buffer", style="cyan")
    table.add_column("Status")
    table.add_column("Length", justify="right")

    table.add_row(session.key.path, session.status().value, str(len(session.content() or "")))
    console.print(table)
