"""JudgeClient — talks to the contest judge's snapshot and submission endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx
from opentelemetry import trace
from pydantic import ValidationError

from judgesync.protocols.errors import RemoteConnectionError, RemoteResponseError
from judgesync.protocols.models import SnapshotBody, SubmissionReceipt, SubmissionRequest
from judgesync.utils.telemetry import ATTR_CONTEST_ID

if TYPE_CHECKING:
    from judgesync.core.buffers.models import BufferKey


class JudgeClient:
    """HTTP client for one contest on a remote judge.

    Satisfies both the :class:`~judgesync.protocols.snapshots.SnapshotStore`
    and :class:`~judgesync.protocols.snapshots.SubmissionGateway` protocols.

    Usage::

        async with JudgeClient("https://judge.example.com/api", "spring-2026") as client:
            text = await client.fetch_snapshot(BufferKey(language="python", problem_id=42))
    """

    def __init__(
        self,
        base_url: str,
        contest_id: str,
        *,
        token: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._contest_id = contest_id
        self._token = token
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def contest_id(self) -> str:
        return self._contest_id

    async def __aenter__(self) -> JudgeClient:
        headers: dict[str, str] = {}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers=headers,
            timeout=self._timeout,
        )
        return self

    async def __aexit__(self, *_: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            msg = "JudgeClient must be used as an async context manager"
            raise RuntimeError(msg)
        trace.get_current_span().set_attribute(ATTR_CONTEST_ID, self._contest_id)
        return self._client

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def _problem_path(self, problem_id: int) -> str:
        return f"/contest/{quote(self._contest_id, safe='')}/problem/{problem_id}"

    def _snapshot_path(self, key: BufferKey) -> str:
        return f"{self._problem_path(key.problem_id)}/snapshot/{quote(key.language, safe='')}"

    # ------------------------------------------------------------------
    # SnapshotStore
    # ------------------------------------------------------------------

    async def fetch_snapshot(self, key: BufferKey) -> str | None:
        """GET the last saved snapshot; ``None`` when the judge has none (404)."""
        try:
            response = await self._http().get(self._snapshot_path(key))
        except httpx.HTTPError as exc:
            raise RemoteConnectionError(str(exc)) from exc

        if response.status_code == 404:
            return None
        _raise_for_status(response)
        return self._decode_snapshot(response)

    async def save_snapshot(self, key: BufferKey, content: str) -> None:
        """PUT *content* as the snapshot for *key*."""
        body = SnapshotBody(content=content)
        try:
            response = await self._http().put(self._snapshot_path(key), json=body.model_dump())
        except httpx.HTTPError as exc:
            raise RemoteConnectionError(str(exc)) from exc
        _raise_for_status(response)

    # ------------------------------------------------------------------
    # SubmissionGateway
    # ------------------------------------------------------------------

    async def create_submission(self, key: BufferKey, content: str) -> SubmissionReceipt:
        """POST a new submission and return the judge's receipt."""
        request = SubmissionRequest(language=key.language, content=content)
        path = f"{self._problem_path(key.problem_id)}/submission"
        try:
            response = await self._http().post(path, json=request.model_dump())
        except httpx.HTTPError as exc:
            raise RemoteConnectionError(str(exc)) from exc
        _raise_for_status(response)

        try:
            return SubmissionReceipt.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise RemoteResponseError(response.status_code, f"invalid receipt: {exc}") from exc

    @staticmethod
    def _decode_snapshot(response: httpx.Response) -> str:
        """Accept either a JSON string, a ``{"content": ...}`` object, or plain text."""
        content_type = response.headers.get("content-type", "")
        if "json" not in content_type:
            return response.text

        try:
            data: Any = response.json()
        except ValueError as exc:
            raise RemoteResponseError(response.status_code, f"invalid JSON: {exc}") from exc
        if data is None:
            return ""
        if isinstance(data, str):
            return data
        if isinstance(data, dict) and isinstance(data.get("content"), str):
            return str(data["content"])
        raise RemoteResponseError(response.status_code, "unexpected snapshot payload")


def _raise_for_status(response: httpx.Response) -> None:
    if response.status_code >= 400:
        raise RemoteResponseError(response.status_code, response.text)
