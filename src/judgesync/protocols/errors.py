"""Shared error types for the remote judge layer."""


class RemoteError(Exception):
    """Base error for all remote collaborator failures."""


class RemoteConnectionError(RemoteError):
    """The judge could not be reached (network failure or timeout)."""


class RemoteResponseError(RemoteError):
    """The judge answered with an unexpected status or payload."""

    def __init__(self, status_code: int, detail: str = "") -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"Judge responded {status_code}" + (f": {detail}" if detail else ""))
