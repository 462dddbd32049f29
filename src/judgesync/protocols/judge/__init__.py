"""Remote judge HTTP client."""

from judgesync.protocols.judge.client import JudgeClient

__all__ = ["JudgeClient"]
