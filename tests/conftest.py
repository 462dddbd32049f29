"""Shared fixtures: scriptable in-memory collaborators for the sync core."""

from __future__ import annotations

import asyncio

import pytest

from judgesync.core.buffers.models import BufferKey
from judgesync.core.buffers.store import BufferStore
from judgesync.protocols.models import SubmissionReceipt
from judgesync.protocols.snapshots import InMemorySnapshotStore


class ScriptedSnapshotStore(InMemorySnapshotStore):
    """In-memory snapshot store whose timing and failures tests can control.

    * ``fetch_gate`` / ``save_gate`` — cleared events hold calls in flight.
    * ``fetch_error`` / ``save_error`` — raised instead of succeeding.
    * ``fetch_calls`` / ``save_attempts`` — every call, successful or not.
    * ``max_active_saves`` — highest number of concurrently running saves.
    """

    def __init__(self, snapshots: dict[BufferKey, str] | None = None) -> None:
        super().__init__(snapshots)
        self.fetch_gate = asyncio.Event()
        self.fetch_gate.set()
        self.save_gate = asyncio.Event()
        self.save_gate.set()
        self.fetch_error: Exception | None = None
        self.save_error: Exception | None = None
        self.fetch_calls: list[BufferKey] = []
        self.save_attempts: list[tuple[BufferKey, str]] = []
        self.active_saves = 0
        self.max_active_saves = 0

    def seed(self, key: BufferKey, content: str) -> None:
        """Store a snapshot without recording it as a save."""
        self._snapshots[key] = content

    async def fetch_snapshot(self, key: BufferKey) -> str | None:
        self.fetch_calls.append(key)
        await self.fetch_gate.wait()
        if self.fetch_error is not None:
            raise self.fetch_error
        return await super().fetch_snapshot(key)

    async def save_snapshot(self, key: BufferKey, content: str) -> None:
        self.save_attempts.append((key, content))
        self.active_saves += 1
        self.max_active_saves = max(self.max_active_saves, self.active_saves)
        try:
            await self.save_gate.wait()
            if self.save_error is not None:
                raise self.save_error
            await super().save_snapshot(key, content)
        finally:
            self.active_saves -= 1


class FakeJudge(ScriptedSnapshotStore):
    """Stand-in for ``JudgeClient``: snapshot store, submission gateway, context manager."""

    def __init__(self, snapshots: dict[BufferKey, str] | None = None) -> None:
        super().__init__(snapshots)
        self.submissions: list[tuple[BufferKey, str]] = []
        self.submit_error: Exception | None = None
        self.entered = 0
        self.exited = 0

    async def __aenter__(self) -> FakeJudge:
        self.entered += 1
        return self

    async def __aexit__(self, *_: object) -> None:
        self.exited += 1

    async def create_submission(self, key: BufferKey, content: str) -> SubmissionReceipt:
        if self.submit_error is not None:
            raise self.submit_error
        self.submissions.append((key, content))
        return SubmissionReceipt(id=len(self.submissions))


@pytest.fixture
def key() -> BufferKey:
    return BufferKey(language="python", problem_id=42)


@pytest.fixture
def store() -> BufferStore:
    return BufferStore()


@pytest.fixture
def snapshots() -> ScriptedSnapshotStore:
    return ScriptedSnapshotStore()


@pytest.fixture
def fake_judge() -> FakeJudge:
    return FakeJudge()
