"""BufferSync — wires the sync core together for one client process."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from judgesync.core.buffers.models import BufferKey
from judgesync.core.buffers.store import BufferStore
from judgesync.core.sync.persister import DEFAULT_WAIT, ThrottledPersister
from judgesync.core.sync.restore import RestoreLoader
from judgesync.core.sync.session import EditorSession
from judgesync.core.sync.submission import SubmissionReader
from judgesync.protocols.judge.client import JudgeClient
from judgesync.utils.telemetry import configure_telemetry

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from judgesync.protocols.models import SubmissionReceipt
    from judgesync.protocols.snapshots import SnapshotStore, SubmissionGateway
    from judgesync.sdk.models import SyncSettings

logger = logging.getLogger(__name__)


class BufferSync:
    """Owns the buffer store and the components that keep it in sync.

    One instance lives for the whole client session.  Closing it flushes
    every buffer that still has unsaved edits.
    """

    def __init__(
        self,
        snapshots: SnapshotStore,
        submissions: SubmissionGateway,
        *,
        throttle_wait: float = DEFAULT_WAIT,
        store: BufferStore | None = None,
    ) -> None:
        self.store = store or BufferStore()
        self.loader = RestoreLoader(self.store, snapshots)
        self.persister = ThrottledPersister(self.store, snapshots, wait=throttle_wait)
        self.reader = SubmissionReader(self.store, submissions)
        self._closed = False

    async def __aenter__(self) -> BufferSync:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    def open(self, language: str, problem_id: int) -> EditorSession:
        """Create an editor session for a buffer (mount it with ``async with``)."""
        return EditorSession(
            BufferKey(language=language, problem_id=problem_id),
            store=self.store,
            loader=self.loader,
            persister=self.persister,
            reader=self.reader,
        )

    async def submit(self, language: str, problem_id: int) -> SubmissionReceipt:
        return await self.reader.submit(BufferKey(language=language, problem_id=problem_id))

    async def aclose(self) -> bool:
        """Flush all buffers and detach from the store; safe to call twice."""
        if self._closed:
            return True
        self._closed = True
        await self.loader.aclose()
        durable = await self.persister.aclose()
        if not durable:
            logger.warning("Some buffers could not be persisted before shutdown")
        return durable


@asynccontextmanager
async def connect(settings: SyncSettings) -> AsyncIterator[BufferSync]:
    """Open a :class:`JudgeClient` for *settings* and yield a ready :class:`BufferSync`.

    Buffers are flushed before the HTTP client is closed.
    """
    if settings.telemetry and settings.telemetry.enabled:
        configure_telemetry(
            console=settings.telemetry.console,
            otlp_endpoint=settings.telemetry.otlp_endpoint,
        )

    client = JudgeClient(
        settings.base_url,
        settings.contest_id,
        token=settings.token,
        timeout=settings.timeout,
    )
    async with client:
        sync = BufferSync(client, client, throttle_wait=settings.throttle_wait)
        try:
            yield sync
        finally:
            await sync.aclose()
