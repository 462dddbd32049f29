"""Tests for shared CLI output helpers."""

from __future__ import annotations

import re
from unittest.mock import patch

from rich.console import Console

from judgesync.cli_commands._output import print_session_status
from judgesync.protocols.errors import RemoteConnectionError
from judgesync.sdk.sync import BufferSync


def _status_row(session) -> str:
    recorder = Console(record=True, width=120)
    with patch("judgesync.cli_commands._output.console", recorder):
        print_session_status(session)
    return recorder.export_text()


class TestPrintSessionStatus:
    async def test_reports_buffer_length(self, snapshots, key) -> None:
        snapshots.seed(key, "print(1)")
        sync = BufferSync(snapshots, snapshots)

        async with sync.open("python", 42) as session:
            await session.wait_restored()
            text = _status_row(session)

        await sync.aclose()
        assert re.search(r"42/python\s*│\s*saved\s*│\s*8\s*│", text)

    async def test_failed_restore_reports_zero_length(self, snapshots, key) -> None:
        snapshots.fetch_error = RemoteConnectionError("down")
        sync = BufferSync(snapshots, snapshots)

        async with sync.open("python", 42) as session:
            await session.wait_restored()
            assert session.view() == "Error loading snapshot"
            text = _status_row(session)

        await sync.aclose()
        assert re.search(r"42/python\s*│\s*saved\s*│\s*0\s*│", text)
