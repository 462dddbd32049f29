"""Sync core — restore, throttled persistence, submission, and editor sessions."""

from judgesync.core.sync.persister import PersistStatus, ThrottledPersister
from judgesync.core.sync.restore import RestoreLoader
from judgesync.core.sync.session import FAILED_PLACEHOLDER, LOADING_PLACEHOLDER, EditorSession
from judgesync.core.sync.submission import SubmissionReader

__all__ = [
    "FAILED_PLACEHOLDER",
    "LOADING_PLACEHOLDER",
    "EditorSession",
    "PersistStatus",
    "RestoreLoader",
    "SubmissionReader",
    "ThrottledPersister",
]
