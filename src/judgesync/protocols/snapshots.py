"""Remote collaborator protocols and in-memory implementations.

:class:`SnapshotStore` is what the restore and persist paths talk to;
:class:`SubmissionGateway` is what the submission path talks to.  The
HTTP :class:`~judgesync.protocols.judge.client.JudgeClient` satisfies both.

:class:`InMemorySnapshotStore` and :class:`InMemorySubmissionGateway` are
lightweight dict-backed stand-ins suitable for testing and offline use.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from judgesync.protocols.models import SubmissionReceipt

if TYPE_CHECKING:
    from judgesync.core.buffers.models import BufferKey


@runtime_checkable
class SnapshotStore(Protocol):
    """Async persistence protocol for buffer snapshots."""

    async def fetch_snapshot(self, key: BufferKey) -> str | None:
        """Return the last persisted text for *key*, or ``None`` if there is none."""
        ...

    async def save_snapshot(self, key: BufferKey, content: str) -> None:
        """Persist *content* as the snapshot for *key* (upsert semantics)."""
        ...


@runtime_checkable
class SubmissionGateway(Protocol):
    """Hands solution code to the judge."""

    async def create_submission(self, key: BufferKey, content: str) -> SubmissionReceipt:
        """Submit *content* for the key's problem and language."""
        ...


class InMemorySnapshotStore:
    """Dict-backed :class:`SnapshotStore` implementation.

    ``saves`` records every write in order, which makes it convenient for
    asserting on persistence behaviour in tests.
    """

    def __init__(self, snapshots: dict[BufferKey, str] | None = None) -> None:
        self._snapshots: dict[BufferKey, str] = dict(snapshots or {})
        self.saves: list[tuple[BufferKey, str]] = []

    async def fetch_snapshot(self, key: BufferKey) -> str | None:
        return self._snapshots.get(key)

    async def save_snapshot(self, key: BufferKey, content: str) -> None:
        self._snapshots[key] = content
        self.saves.append((key, content))

    def get(self, key: BufferKey) -> str | None:
        """Synchronous peek at the stored snapshot."""
        return self._snapshots.get(key)


class InMemorySubmissionGateway:
    """Records submissions locally and hands out sequential ids."""

    def __init__(self) -> None:
        self.submissions: list[tuple[BufferKey, str]] = []

    async def create_submission(self, key: BufferKey, content: str) -> SubmissionReceipt:
        self.submissions.append((key, content))
        return SubmissionReceipt(id=len(self.submissions))
