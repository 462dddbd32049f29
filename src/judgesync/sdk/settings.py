"""Settings loading for the judgesync SDK and CLI."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from judgesync.sdk.errors import SettingsValidationError
from judgesync.sdk.models import SyncSettings


class SettingsLoader:
    """Load and validate a settings YAML file into :class:`SyncSettings`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self, **overrides: Any) -> SyncSettings:
        """Read YAML, interpolate env vars, apply *overrides*, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing.  Overrides whose
        value is ``None`` are ignored.

        Raises:
            SettingsValidationError: On YAML parse errors or schema validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SettingsValidationError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise SettingsValidationError(f"YAML parse error: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise SettingsValidationError("Settings YAML must be a mapping")

        return build_settings({**data, **_present(overrides)})


def build_settings(data: dict[str, Any]) -> SyncSettings:
    """Validate a plain mapping into :class:`SyncSettings`."""
    try:
        return SyncSettings.model_validate(data)
    except ValidationError as exc:
        raise SettingsValidationError(str(exc)) from exc


def _present(values: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}
