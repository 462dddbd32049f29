"""RestoreLoader — lazily fill missing buffers from their last remote snapshot.

At most one fetch is in flight per key, no matter how often the editor
remounts.  The result of a fetch is applied only if the key is *still*
missing when the fetch completes: a user who started typing while the
snapshot was on its way keeps what they typed, and the late snapshot is
discarded.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from judgesync.core.buffers.models import BufferOrigin
from judgesync.core.errors import RestoreFetchFailed
from judgesync.utils.telemetry import ATTR_OUTCOME, get_tracer, set_key_attributes

if TYPE_CHECKING:
    from judgesync.core.buffers.models import BufferEntry, BufferKey
    from judgesync.core.buffers.store import BufferStore
    from judgesync.protocols.snapshots import SnapshotStore

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class RestoreLoader:
    """Fills :class:`BufferStore` keys on first use.

    Failures never propagate to the caller of :meth:`ensure`; they are
    logged and recorded so the editor can show a placeholder, and the key
    is left absent so a later :meth:`ensure` tries again.
    """

    def __init__(self, store: BufferStore, snapshots: SnapshotStore) -> None:
        self._store = store
        self._snapshots = snapshots
        self._pending: dict[BufferKey, asyncio.Task[None]] = {}
        self._failures: dict[BufferKey, RestoreFetchFailed] = {}
        self._not_found: set[BufferKey] = set()
        self._unsubscribe = store.subscribe(self._on_write)

    @property
    def pending(self) -> frozenset[BufferKey]:
        """Keys with a restore fetch currently in flight."""
        return frozenset(self._pending)

    def is_pending(self, key: BufferKey) -> bool:
        return key in self._pending

    def failure(self, key: BufferKey) -> RestoreFetchFailed | None:
        """The last restore failure for *key*, if it has not been superseded."""
        return self._failures.get(key)

    def found_nothing(self, key: BufferKey) -> bool:
        """True when *key* was restored as empty because the judge had no snapshot.

        Cleared by the first local edit.
        """
        return key in self._not_found

    def ensure(self, key: BufferKey) -> asyncio.Task[None] | None:
        """Start a restore for *key* unless it is loaded or already loading.

        Returns the in-flight task (new or existing), or ``None`` when the
        key is already present in the store.  Must be called from within a
        running event loop.
        """
        if self._store.has(key):
            return None
        task = self._pending.get(key)
        if task is not None:
            return task

        task = asyncio.get_running_loop().create_task(
            self._restore(key), name=f"judgesync-restore-{key}"
        )
        self._pending[key] = task
        return task

    async def wait(self, key: BufferKey) -> None:
        """Wait for the in-flight restore of *key*, if any."""
        task = self._pending.get(key)
        if task is not None:
            await asyncio.shield(task)

    async def aclose(self) -> None:
        """Stop observing the store and let in-flight fetches settle."""
        self._unsubscribe()
        pending = list(self._pending.values())
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    async def _restore(self, key: BufferKey) -> None:
        with _tracer.start_as_current_span("judgesync.restore") as span:
            set_key_attributes(span, key)
            try:
                text = await self._snapshots.fetch_snapshot(key)
            except Exception as exc:
                failure = RestoreFetchFailed(key, str(exc) or exc.__class__.__name__)
                self._failures[key] = failure
                span.set_attribute(ATTR_OUTCOME, "failed")
                logger.warning("%s", failure)
                return
            finally:
                self._pending.pop(key, None)

            # Local edits made while the fetch was outstanding always win.
            if self._store.has(key):
                span.set_attribute(ATTR_OUTCOME, "discarded")
                logger.debug("Discarding late snapshot for %s: buffer already edited", key)
                return

            span.set_attribute(ATTR_OUTCOME, "applied" if text is not None else "empty")
            if text is None:
                self._not_found.add(key)
            self._store.set(key, text or "", origin=BufferOrigin.RESTORED)
            logger.debug("Restored %s (%d chars)", key, len(text or ""))

    def _on_write(self, entry: BufferEntry) -> None:
        self._failures.pop(entry.key, None)
        if entry.origin is not BufferOrigin.RESTORED:
            self._not_found.discard(entry.key)
