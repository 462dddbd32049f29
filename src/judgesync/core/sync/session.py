"""EditorSession — the seam between an editor view and the sync core.

Opening a session mounts the editor for one buffer (starting a restore if
the buffer has never been loaded); closing it tears the view down and
flushes any edit that has not been persisted yet.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from judgesync.core.buffers.models import BufferOrigin

if TYPE_CHECKING:
    from judgesync.core.buffers.models import BufferKey
    from judgesync.core.buffers.store import BufferStore
    from judgesync.core.sync.persister import PersistStatus, ThrottledPersister
    from judgesync.core.sync.restore import RestoreLoader
    from judgesync.core.sync.submission import SubmissionReader
    from judgesync.protocols.models import SubmissionReceipt

logger = logging.getLogger(__name__)

LOADING_PLACEHOLDER = "Loading..."
FAILED_PLACEHOLDER = "Error loading snapshot"


class EditorSession:
    """One mounted editor view over a single buffer.

    Usage::

        async with sync.open("python", 42) as session:
            await session.wait_restored()
            session.edit("print(1)")
    """

    def __init__(
        self,
        key: BufferKey,
        *,
        store: BufferStore,
        loader: RestoreLoader,
        persister: ThrottledPersister,
        reader: SubmissionReader,
    ) -> None:
        self.key = key
        self._store = store
        self._loader = loader
        self._persister = persister
        self._reader = reader
        self._mounted = False

    async def __aenter__(self) -> EditorSession:
        self.mount()
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close()

    @property
    def mounted(self) -> bool:
        return self._mounted

    def mount(self) -> None:
        """Attach the view; triggers a restore if the buffer is missing."""
        self._mounted = True
        self._loader.ensure(self.key)

    async def wait_restored(self) -> None:
        await self._loader.wait(self.key)

    def content(self) -> str | None:
        """The raw buffer text, or ``None`` while it has not been loaded."""
        return self._store.get(self.key)

    def view(self) -> str:
        """Text the editor should display right now."""
        content = self.content()
        if content is not None:
            return content
        if self._loader.failure(self.key) is not None:
            return FAILED_PLACEHOLDER
        return LOADING_PLACEHOLDER

    def edit(self, content: str) -> None:
        """Apply a content change event from the editor."""
        origin = BufferOrigin.PENDING if self._loader.is_pending(self.key) else BufferOrigin.LOCAL
        self._store.set(self.key, content, origin=origin)

    def status(self) -> PersistStatus:
        return self._persister.status(self.key)

    async def submit(self) -> SubmissionReceipt:
        return await self._reader.submit(self.key)

    async def close(self) -> bool:
        """Tear down the view and flush unsaved edits; safe to call twice."""
        if not self._mounted:
            return True
        self._mounted = False
        durable = await self._persister.flush(self.key)
        if not durable:
            logger.warning("Closed %s with unsaved edits", self.key)
        return durable
