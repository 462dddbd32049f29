"""Shared error types for the buffer synchronization core."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from judgesync.core.buffers.models import BufferKey


class BufferSyncError(Exception):
    """Base error for all buffer synchronization failures."""


class RestoreFetchFailed(BufferSyncError):
    """Fetching the last snapshot for a buffer failed (recoverable)."""

    def __init__(self, key: BufferKey, detail: str = "") -> None:
        self.key = key
        self.detail = detail
        super().__init__(f"Restore failed for {key}" + (f": {detail}" if detail else ""))


class PersistWriteFailed(BufferSyncError):
    """Writing a buffer back to the snapshot store failed (recoverable)."""

    def __init__(self, key: BufferKey, detail: str = "") -> None:
        self.key = key
        self.detail = detail
        super().__init__(f"Persist failed for {key}" + (f": {detail}" if detail else ""))


class SubmissionPreconditionFailed(BufferSyncError):
    """A submission was attempted for a buffer that was never loaded or edited."""

    def __init__(self, key: BufferKey, reason: str = "no buffer is loaded") -> None:
        self.key = key
        self.reason = reason
        super().__init__(
            f"Nothing to submit for problem {key.problem_id} in {key.language}: {reason}"
        )


class SubmissionFailed(BufferSyncError):
    """The judge rejected or could not receive a submission."""

    def __init__(self, key: BufferKey, detail: str = "") -> None:
        self.key = key
        self.detail = detail
        super().__init__(f"Submission failed for {key}" + (f": {detail}" if detail else ""))
