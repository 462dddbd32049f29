"""SDK error types."""

from __future__ import annotations


class SettingsValidationError(Exception):
    """Raised when a settings YAML fails parsing or validation."""
