"""Buffer cache — keyed in-memory store of editor contents."""

from judgesync.core.buffers.models import BufferEntry, BufferKey, BufferOrigin
from judgesync.core.buffers.store import BufferListener, BufferStore

__all__ = [
    "BufferEntry",
    "BufferKey",
    "BufferListener",
    "BufferOrigin",
    "BufferStore",
]
