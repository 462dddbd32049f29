"""Buffer data models — keys, entries, and provenance tags.

A buffer holds the full editor text for one ``(language, problem)`` pair.
Entries are replaced wholesale on every edit; there is no diffing.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class BufferOrigin(str, Enum):
    """Where the current content of a buffer came from (diagnostics only)."""

    LOCAL = "local"
    RESTORED = "restored"
    PENDING = "pending"


class BufferKey(BaseModel):
    """Composite identifier for a buffer.

    Equality is structural and instances are hashable, so keys can be used
    directly as dict keys and set members.
    """

    model_config = ConfigDict(frozen=True)

    language: str
    problem_id: int

    @property
    def path(self) -> str:
        """Editor model path, e.g. ``"42/python"``."""
        return f"{self.problem_id}/{self.language}"

    def __str__(self) -> str:
        return self.path


class BufferEntry(BaseModel):
    """The current content of one buffer plus its provenance."""

    model_config = ConfigDict(frozen=True)

    key: BufferKey
    content: str
    origin: BufferOrigin = BufferOrigin.LOCAL
