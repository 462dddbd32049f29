"""Tests for ``judgesync watch`` and its file-following helpers."""

from __future__ import annotations

import asyncio
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from judgesync.cli import main
from judgesync.cli_commands.watch import follow_file, seed_file
from judgesync.core.buffers.models import BufferKey
from judgesync.sdk.sync import BufferSync

ARGS = ["--base-url", "https://judge.example.com/api", "--contest", "c1"]
KEY = BufferKey(language="python", problem_id=42)


class TestWatchCommand:
    def test_watch_persists_file_on_exit(self, fake_judge, tmp_path: Path) -> None:
        source = tmp_path / "main.py"
        source.write_text("print(1)\n", encoding="utf-8")
        with patch("judgesync.sdk.sync.JudgeClient", return_value=fake_judge):
            result = CliRunner().invoke(
                main,
                [*ARGS, "watch", "42", str(source), "-l", "python",
                 "--interval", "0.02", "--duration", "0.2"],
            )

        assert result.exit_code == 0, result.output
        assert "Watching" in result.output
        assert fake_judge.saves == [(KEY, "print(1)\n")]
        assert fake_judge.exited == 1

    def test_watch_seeds_missing_file(self, fake_judge, tmp_path: Path) -> None:
        fake_judge.seed(KEY, "restored = True\n")
        target = tmp_path / "main.py"
        with patch("judgesync.sdk.sync.JudgeClient", return_value=fake_judge):
            result = CliRunner().invoke(
                main,
                [*ARGS, "watch", "42", str(target), "-l", "python",
                 "--interval", "0.02", "--duration", "0.1"],
            )

        assert result.exit_code == 0, result.output
        assert "Restored snapshot" in result.output
        assert target.read_text(encoding="utf-8") == "restored = True\n"
        # Feeding the restored text back is not a change worth saving.
        assert fake_judge.saves == []


class TestFollowFile:
    async def test_applies_each_change_once(self, snapshots, tmp_path: Path) -> None:
        path = tmp_path / "main.py"
        path.write_text("a", encoding="utf-8")
        sync = BufferSync(snapshots, snapshots, throttle_wait=10)
        stop = asyncio.Event()

        async with sync.open("python", 42) as session:
            task = asyncio.create_task(follow_file(session, path, interval=0.01, stop=stop))
            await asyncio.sleep(0.05)
            path.write_text("ab", encoding="utf-8")
            await asyncio.sleep(0.05)
            stop.set()
            changes = await task
            assert session.content() == "ab"

        await sync.aclose()
        assert changes == 2
        assert snapshots.saves == [(KEY, "ab")]

    async def test_unreadable_file_is_skipped(self, snapshots, tmp_path: Path) -> None:
        sync = BufferSync(snapshots, snapshots)
        stop = asyncio.Event()
        asyncio.get_running_loop().call_later(0.05, stop.set)

        async with sync.open("python", 42) as session:
            changes = await follow_file(session, tmp_path / "missing.py", interval=0.01, stop=stop)

        await sync.aclose()
        assert changes == 0

    async def test_seed_leaves_existing_file(self, snapshots, tmp_path: Path) -> None:
        path = tmp_path / "main.py"
        path.write_text("mine", encoding="utf-8")
        snapshots.seed(KEY, "theirs")
        sync = BufferSync(snapshots, snapshots)

        async with sync.open("python", 42) as session:
            assert await seed_file(session, path) is False

        await sync.aclose()
        assert path.read_text(encoding="utf-8") == "mine"
