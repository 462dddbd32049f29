"""``judgesync snapshot`` — pull and push remote buffer snapshots."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from judgesync.cli_commands._output import console, resolve_settings


@click.group()
def snapshot() -> None:
    """Inspect and update remote snapshots."""


@snapshot.command("pull")
@click.argument("problem", type=int)
@click.option("--language", "-l", required=True, help="Solution language.")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the snapshot to this file instead of stdout.",
)
@click.pass_context
def pull(ctx: click.Context, problem: int, language: str, output: str | None) -> None:
    """Restore the saved solution for PROBLEM."""
    from judgesync.sdk.sync import connect

    settings = resolve_settings(ctx)

    async def _pull() -> tuple[str | None, str]:
        async with connect(settings) as sync:
            async with sync.open(language, problem) as session:
                await session.wait_restored()
                failure = sync.loader.failure(session.key)
                return sync.store.get(session.key), str(failure or "")

    try:
        text, failure = asyncio.run(_pull())
    except Exception as exc:
        console.print(f"[red]Pull error:[/red] {exc}")
        sys.exit(1)

    if text is None:
        console.print(f"[red]Pull error:[/red] {failure or 'snapshot unavailable'}")
        sys.exit(1)

    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]Wrote {len(text)} characters to {output}[/green]")
    else:
        click.echo(text, nl=False)


@snapshot.command("push")
@click.argument("problem", type=int)
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--language", "-l", required=True, help="Solution language.")
@click.pass_context
def push(ctx: click.Context, problem: int, file: str, language: str) -> None:
    """Save the contents of FILE as the snapshot for PROBLEM."""
    from judgesync.sdk.sync import connect

    settings = resolve_settings(ctx)
    text = Path(file).read_text(encoding="utf-8")

    async def _push() -> bool:
        async with connect(settings) as sync:
            session = sync.open(language, problem)
            session.mount()
            session.edit(text)
            return await session.close()

    try:
        durable = asyncio.run(_push())
    except Exception as exc:
        console.print(f"[red]Push error:[/red] {exc}")
        sys.exit(1)

    if not durable:
        console.print("[red]Push error:[/red] the judge did not accept the snapshot")
        sys.exit(1)
    console.print(f"[green]Saved snapshot for problem {problem} ({language}).[/green]")
