"""SubmissionReader — hand the current buffer to the judge."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from judgesync.core.errors import SubmissionFailed, SubmissionPreconditionFailed
from judgesync.protocols.errors import RemoteError
from judgesync.utils.telemetry import (
    ATTR_CONTENT_LENGTH,
    ATTR_SUBMISSION_ID,
    get_tracer,
    set_key_attributes,
)

if TYPE_CHECKING:
    from judgesync.core.buffers.models import BufferKey
    from judgesync.core.buffers.store import BufferStore
    from judgesync.protocols.models import SubmissionReceipt
    from judgesync.protocols.snapshots import SubmissionGateway

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class SubmissionReader:
    """Reads a stable snapshot of a buffer and submits it.

    The buffer is read synchronously before the first suspension point, so
    keystrokes that arrive while the submission is on the wire do not change
    what was submitted.
    """

    def __init__(self, store: BufferStore, gateway: SubmissionGateway) -> None:
        self._store = store
        self._gateway = gateway

    def read_for_submission(self, key: BufferKey) -> str | None:
        return self._store.get(key)

    async def submit(self, key: BufferKey) -> SubmissionReceipt:
        """Submit the current buffer for *key*.

        Raises:
            SubmissionPreconditionFailed: No buffer exists for *key*; nothing
                was sent.
            SubmissionFailed: The judge could not accept the submission.
        """
        content = self.read_for_submission(key)
        if content is None:
            raise SubmissionPreconditionFailed(key)

        with _tracer.start_as_current_span("judgesync.submit") as span:
            set_key_attributes(span, key)
            span.set_attribute(ATTR_CONTENT_LENGTH, len(content))
            try:
                receipt = await self._gateway.create_submission(key, content)
            except RemoteError as exc:
                raise SubmissionFailed(key, str(exc)) from exc
            span.set_attribute(ATTR_SUBMISSION_ID, str(receipt.id))

        logger.info("Submitted %s as submission %s", key, receipt.id)
        return receipt
