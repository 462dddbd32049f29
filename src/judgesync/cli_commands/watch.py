"""``judgesync watch`` — follow a local file as if it were the editor."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from judgesync.cli_commands._output import console, print_session_status, resolve_settings

if TYPE_CHECKING:
    from judgesync.core.sync.session import EditorSession

logger = logging.getLogger(__name__)


async def follow_file(
    session: EditorSession,
    path: Path,
    *,
    interval: float,
    stop: asyncio.Event,
) -> int:
    """Poll *path* every *interval* seconds and feed changes into *session*.

    Returns the number of content changes applied.  Unreadable polls are
    logged and skipped.
    """
    last: str | None = None
    changes = 0
    while not stop.is_set():
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Cannot read %s: %s", path, exc)
        else:
            if text != last:
                session.edit(text)
                last = text
                changes += 1
        try:
            await asyncio.wait_for(stop.wait(), timeout=interval)
        except TimeoutError:
            pass
    return changes


async def seed_file(session: EditorSession, path: Path) -> bool:
    """Write the restored snapshot to *path* if the file does not exist yet."""
    if path.exists():
        return False
    await session.wait_restored()
    content = session.content()
    if content is None:
        return False
    path.write_text(content, encoding="utf-8")
    return True


@click.command()
@click.argument("problem", type=int)
@click.argument("file", type=click.Path(dir_okay=False))
@click.option("--language", "-l", required=True, help="Solution language.")
@click.option("--interval", default=0.25, show_default=True, help="Poll interval in seconds.")
@click.option(
    "--duration",
    type=float,
    default=None,
    help="Stop after this many seconds (default: until Ctrl-C).",
)
@click.pass_context
def watch(
    ctx: click.Context,
    problem: int,
    file: str,
    language: str,
    interval: float,
    duration: float | None,
) -> None:
    """Sync FILE with the saved solution for PROBLEM while it is being edited.

    If FILE does not exist it is created from the saved snapshot first.
    """
    from judgesync.sdk.sync import connect

    settings = resolve_settings(ctx)
    path = Path(file)

    async def _watch() -> None:
        stop = asyncio.Event()
        if duration is not None:
            asyncio.get_running_loop().call_later(duration, stop.set)

        async with connect(settings) as sync:
            async with sync.open(language, problem) as session:
                if await seed_file(session, path):
                    console.print(f"Restored snapshot into {path}")
                console.print(f"Watching {path} (Ctrl-C to stop)")
                try:
                    await follow_file(session, path, interval=interval, stop=stop)
                finally:
                    await session.close()
                    print_session_status(session)

    try:
        asyncio.run(_watch())
    except KeyboardInterrupt:
        console.print("[yellow]Stopped.[/yellow]")
    except Exception as exc:
        console.print(f"[red]Watch error:[/red] {exc}")
        sys.exit(1)
