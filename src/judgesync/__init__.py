"""judgesync — editor buffer synchronization for contest-judging clients."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from judgesync.sdk.sync import BufferSync as BufferSync
    from judgesync.sdk.sync import connect as connect

_SDK_EXPORTS = {
    "BufferSync": "judgesync.sdk.sync",
    "connect": "judgesync.sdk.sync",
}


def __getattr__(name: str) -> object:
    module_path = _SDK_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'judgesync' has no attribute {name!r}")
