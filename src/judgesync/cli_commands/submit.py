"""``judgesync submit`` — submit a solution to the judge."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from judgesync.cli_commands._output import console, print_receipt, resolve_settings
from judgesync.core.errors import SubmissionPreconditionFailed

if TYPE_CHECKING:
    from judgesync.core.sync.session import EditorSession
    from judgesync.protocols.models import SubmissionReceipt
    from judgesync.sdk.sync import BufferSync


@click.command()
@click.argument("problem", type=int)
@click.option("--language", "-l", required=True, help="Solution language.")
@click.option(
    "--file",
    "-f",
    "file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Submit this file. Without it, the saved snapshot is submitted.",
)
@click.pass_context
def submit(ctx: click.Context, problem: int, language: str, file: str | None) -> None:
    """Submit a solution for PROBLEM."""
    from judgesync.sdk.sync import connect

    settings = resolve_settings(ctx)
    text = Path(file).read_text(encoding="utf-8") if file else None

    async def _submit() -> SubmissionReceipt:
        async with connect(settings) as sync:
            async with sync.open(language, problem) as session:
                if text is not None:
                    session.edit(text)
                else:
                    await session.wait_restored()
                    _require_snapshot(sync, session)
                return await session.submit()

    try:
        receipt = asyncio.run(_submit())
    except SubmissionPreconditionFailed as exc:
        console.print(f"[red]Submission blocked:[/red] {exc}")
        sys.exit(1)
    except Exception as exc:
        console.print(f"[red]Submission error:[/red] {exc}")
        sys.exit(1)

    print_receipt(receipt)


def _require_snapshot(sync: BufferSync, session: EditorSession) -> None:
    """Refuse to submit a buffer that holds no saved solution."""
    failure = sync.loader.failure(session.key)
    if failure is not None:
        raise SubmissionPreconditionFailed(session.key, str(failure))
    if sync.loader.found_nothing(session.key):
        raise SubmissionPreconditionFailed(
            session.key, "no saved snapshot; pass --file to submit a local file"
        )
