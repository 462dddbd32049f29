"""Remote collaborators — snapshot store, submission gateway, and the judge client."""

from judgesync.protocols.errors import RemoteConnectionError, RemoteError, RemoteResponseError
from judgesync.protocols.judge import JudgeClient
from judgesync.protocols.models import SnapshotBody, SubmissionReceipt, SubmissionRequest
from judgesync.protocols.snapshots import (
    InMemorySnapshotStore,
    InMemorySubmissionGateway,
    SnapshotStore,
    SubmissionGateway,
)

__all__ = [
    "InMemorySnapshotStore",
    "InMemorySubmissionGateway",
    "JudgeClient",
    "RemoteConnectionError",
    "RemoteError",
    "RemoteResponseError",
    "SnapshotBody",
    "SnapshotStore",
    "SubmissionGateway",
    "SubmissionReceipt",
    "SubmissionRequest",
]
