"""judgesync SDK — programmatic interface for editor buffer synchronization."""

from judgesync.sdk.errors import SettingsValidationError
from judgesync.sdk.models import SyncSettings, TelemetrySettings
from judgesync.sdk.settings import SettingsLoader, build_settings
from judgesync.sdk.sync import BufferSync, connect

__all__ = [
    "BufferSync",
    "SettingsLoader",
    "SettingsValidationError",
    "SyncSettings",
    "TelemetrySettings",
    "build_settings",
    "connect",
]
