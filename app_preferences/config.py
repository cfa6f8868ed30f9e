"""Configuration models and document codec helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

DEFAULT_SETTINGS_FILE = "settings.json"
DEFAULT_WINDOW_WIDTH = 1200
DEFAULT_WINDOW_HEIGHT = 800
DEFAULT_DEBOUNCE = 0.5

YAML_SUFFIXES = {".yaml", ".yml"}


class StoreOptions(BaseModel):
    """Describes where a settings document lives on disk."""

    file: str | None = Field(
        default=None,
        description="Explicit path to the settings file. Overrides every other option.",
    )
    file_name: str = Field(
        default=DEFAULT_SETTINGS_FILE,
        description="Name of the settings file inside the settings directory.",
    )
    file_path: str | None = Field(
        default=None,
        description="Directory of the settings file. Defaults to the user data directory.",
    )
    append_file_path: bool = Field(
        default=False,
        description="When true, ``file_path`` is relative to the user data directory.",
    )

    @model_validator(mode="after")
    def _validate_file_name(self) -> StoreOptions:
        if not self.file_name:
            self.file_name = DEFAULT_SETTINGS_FILE
        if self.file is not None and not self.file.strip():
            raise ValueError("An explicit settings file must not be empty.")
        return self

    @classmethod
    def create(cls, **options: Any) -> StoreOptions:
        """Validate keyword options, re-raising validation problems as ``ValueError``."""
        try:
            return cls.model_validate(options)
        except ValidationError as exc:
            raise ValueError(f"Invalid store options: {exc}") from exc


class SessionDefaults(BaseModel):
    """Fallback geometry and write batching for a window session."""

    width: int | float = Field(
        default=DEFAULT_WINDOW_WIDTH,
        description="Window width used when the session has no usable width.",
    )
    height: int | float = Field(
        default=DEFAULT_WINDOW_HEIGHT,
        description="Window height used when the session has no usable height.",
    )
    debounce: float = Field(
        default=DEFAULT_DEBOUNCE,
        ge=0.0,
        description="Seconds to wait before a burst of geometry changes is written.",
    )

    @model_validator(mode="after")
    def _replace_unset_values(self) -> SessionDefaults:
        if self.width < 0 or self.height < 0:
            raise ValueError("Default window size must not be negative.")
        # Zero means "not configured" for every session default.
        if not self.width:
            self.width = DEFAULT_WINDOW_WIDTH
        if not self.height:
            self.height = DEFAULT_WINDOW_HEIGHT
        if not self.debounce:
            self.debounce = DEFAULT_DEBOUNCE
        return self


def read_document_file(path: Path) -> Any:
    """Return the parsed content of ``path`` or ``None`` when the file is empty."""
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return None
    if path.suffix.lower() in YAML_SUFFIXES:
        return yaml.safe_load(text)
    return json.loads(text)


def write_document_file(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() in YAML_SUFFIXES:
        yaml_text = yaml.safe_dump(
            data,
            allow_unicode=False,
            sort_keys=False,
        )
        path.write_text(yaml_text, encoding="utf-8")
    else:
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
