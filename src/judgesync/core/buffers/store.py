"""BufferStore — process-wide keyed cache of editor buffers.

The store is the single source of truth the editor renders from.  It is
created empty when the client starts and lives for the whole session; keys
are never removed.  A missing key means "not loaded yet", which callers must
keep distinct from an empty buffer.

Every :meth:`BufferStore.set` is an observable event: subscribers are called
synchronously, in registration order, with the new :class:`BufferEntry`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from judgesync.core.buffers.models import BufferEntry, BufferKey, BufferOrigin

logger = logging.getLogger(__name__)

BufferListener = Callable[[BufferEntry], None]


class BufferStore:
    """In-memory mapping of :class:`BufferKey` to :class:`BufferEntry`."""

    def __init__(self) -> None:
        self._entries: dict[BufferKey, BufferEntry] = {}
        self._listeners: list[BufferListener] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    # ------------------------------------------------------------------
    # Read / write contract
    # ------------------------------------------------------------------

    def get(self, key: BufferKey) -> str | None:
        """Return the buffer text for *key*, or ``None`` if never loaded."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        return entry.content

    def has(self, key: BufferKey) -> bool:
        return key in self._entries

    def entry(self, key: BufferKey) -> BufferEntry | None:
        """Return the full entry (content and origin) for *key*."""
        return self._entries.get(key)

    def keys(self) -> Iterator[BufferKey]:
        return iter(list(self._entries))

    def set(
        self,
        key: BufferKey,
        content: str,
        *,
        origin: BufferOrigin = BufferOrigin.LOCAL,
    ) -> BufferEntry:
        """Replace the content for *key* and notify subscribers."""
        entry = BufferEntry(key=key, content=content, origin=origin)
        self._entries[key] = entry
        self._notify(entry)
        return entry

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, listener: BufferListener) -> Callable[[], None]:
        """Register *listener* for every write; returns an unsubscribe callable."""
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: BufferListener) -> None:
        """Remove *listener* (no-op if it is not registered)."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def _notify(self, entry: BufferEntry) -> None:
        # A failing listener must not undo the write or starve the others.
        for listener in list(self._listeners):
            try:
                listener(entry)
            except Exception:
                logger.exception("BufferStore listener failed for %s", entry.key)
