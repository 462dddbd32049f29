"""Wire models shared by the remote collaborators."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SnapshotBody(BaseModel):
    """Request body for saving a snapshot."""

    content: str


class SubmissionRequest(BaseModel):
    """Request body for creating a submission."""

    language: str
    content: str


class SubmissionReceipt(BaseModel):
    """The judge's acknowledgement of a submission."""

    id: int | str
    status: str = Field(default="queued", description="Initial judging state, if reported.")
