"""ThrottledPersister — write buffers back to the snapshot store at a bounded rate.

Each key gets a trailing-edge throttle window:

* the first edit after an idle period opens a window of ``wait`` seconds;
* edits inside the window only mark the key dirty;
* at the window boundary exactly one write fires, carrying the content the
  buffer holds *at that moment* (intermediate values are never sent);
* a new window opens only after that write has settled, so writes for one
  key never overlap and cannot reach the remote store out of order.

Writes whose content equals the last successfully persisted value (the
*cursor*) are skipped.  Failed writes are logged and leave the cursor alone,
so the next window or an explicit :meth:`ThrottledPersister.flush` retries.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from judgesync.core.buffers.models import BufferOrigin
from judgesync.core.errors import PersistWriteFailed
from judgesync.utils.telemetry import (
    ATTR_CONTENT_LENGTH,
    ATTR_OUTCOME,
    get_tracer,
    set_key_attributes,
)

if TYPE_CHECKING:
    from judgesync.core.buffers.models import BufferEntry, BufferKey
    from judgesync.core.buffers.store import BufferStore
    from judgesync.protocols.snapshots import SnapshotStore

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

DEFAULT_WAIT = 1.0


class PersistStatus(str, Enum):
    """Save indicator state for one buffer."""

    SAVED = "saved"
    DIRTY = "dirty"
    SAVING = "saving"
    FAILED = "failed"


@dataclass
class _KeyState:
    timer: asyncio.TimerHandle | None = None
    inflight: asyncio.Task[bool] | None = None
    dirty: bool = False
    failure: PersistWriteFailed | None = None


class ThrottledPersister:
    """Observes :class:`BufferStore` writes and persists them with coalescing.

    Must be driven from a running event loop: windows are scheduled with
    ``loop.call_later`` from inside the store's write notification.
    """

    def __init__(
        self,
        store: BufferStore,
        snapshots: SnapshotStore,
        *,
        wait: float = DEFAULT_WAIT,
    ) -> None:
        if wait <= 0:
            msg = f"throttle wait must be positive, got {wait}"
            raise ValueError(msg)
        self._store = store
        self._snapshots = snapshots
        self._wait = wait
        self._cursor: dict[BufferKey, str] = {}
        self._states: dict[BufferKey, _KeyState] = {}
        self._closed = False
        self._unsubscribe = store.subscribe(self._on_write)

    @property
    def wait(self) -> float:
        return self._wait

    def cursor(self, key: BufferKey) -> str | None:
        """Content last persisted for *key*, or ``None`` if nothing was."""
        return self._cursor.get(key)

    def status(self, key: BufferKey) -> PersistStatus:
        state = self._states.get(key)
        if state is not None and state.inflight is not None:
            return PersistStatus.SAVING
        content = self._store.get(key)
        if content is None or content == self._cursor.get(key):
            return PersistStatus.SAVED
        if state is not None and state.failure is not None:
            return PersistStatus.FAILED
        return PersistStatus.DIRTY

    def last_failure(self, key: BufferKey) -> PersistWriteFailed | None:
        state = self._states.get(key)
        return state.failure if state is not None else None

    # ------------------------------------------------------------------
    # Flushing
    # ------------------------------------------------------------------

    async def flush(self, key: BufferKey) -> bool:
        """Persist *key* now, bypassing the throttle window.

        Cancels any pending window, waits for an in-flight write to settle,
        then writes if the content still differs from the cursor.  Returns
        ``True`` when the buffer is durable afterwards.
        """
        state = self._states.setdefault(key, _KeyState())
        self._cancel_timer(state)
        while state.inflight is not None:
            await asyncio.shield(state.inflight)
            self._cancel_timer(state)
        return await self._start_write(key, state)

    async def aclose(self) -> bool:
        """Flush every known buffer and stop observing the store."""
        self._closed = True
        self._unsubscribe()
        results = [await self.flush(key) for key in list(self._states)]
        return all(results)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _on_write(self, entry: BufferEntry) -> None:
        if entry.origin is BufferOrigin.RESTORED:
            # Restored text is what the remote store already holds.
            self._cursor[entry.key] = entry.content
            return

        state = self._states.setdefault(entry.key, _KeyState())
        state.dirty = True
        if state.timer is None and state.inflight is None:
            self._open_window(entry.key, state)

    def _open_window(self, key: BufferKey, state: _KeyState) -> None:
        if self._closed:
            return
        loop = asyncio.get_running_loop()
        state.timer = loop.call_later(self._wait, self._on_window_end, key)

    def _on_window_end(self, key: BufferKey) -> None:
        state = self._states[key]
        state.timer = None
        self._start_write(key, state)

    @staticmethod
    def _cancel_timer(state: _KeyState) -> None:
        if state.timer is not None:
            state.timer.cancel()
            state.timer = None

    def _start_write(self, key: BufferKey, state: _KeyState) -> asyncio.Task[bool]:
        state.dirty = False
        task = asyncio.get_running_loop().create_task(
            self._drain(key, state), name=f"judgesync-persist-{key}"
        )
        state.inflight = task
        return task

    async def _drain(self, key: BufferKey, state: _KeyState) -> bool:
        try:
            return await self._write(key, state)
        finally:
            state.inflight = None
            if state.dirty and state.timer is None:
                self._open_window(key, state)

    async def _write(self, key: BufferKey, state: _KeyState) -> bool:
        content = self._store.get(key)
        if content is None or content == self._cursor.get(key):
            logger.debug("Skipping persist for %s: unchanged", key)
            state.failure = None
            return True

        with _tracer.start_as_current_span("judgesync.persist") as span:
            set_key_attributes(span, key)
            span.set_attribute(ATTR_CONTENT_LENGTH, len(content))
            try:
                await self._snapshots.save_snapshot(key, content)
            except Exception as exc:
                state.failure = PersistWriteFailed(key, str(exc) or exc.__class__.__name__)
                span.set_attribute(ATTR_OUTCOME, "failed")
                logger.warning("%s", state.failure)
                return False

            span.set_attribute(ATTR_OUTCOME, "saved")

        self._cursor[key] = content
        state.failure = None
        logger.debug("Persisted %s (%d chars)", key, len(content))
        return True
