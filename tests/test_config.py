"""Tests for the configuration models and document codec."""

from __future__ import annotations

import json

import pytest
import yaml

from app_preferences.config import (
    DEFAULT_DEBOUNCE,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    SessionDefaults,
    StoreOptions,
    read_document_file,
    write_document_file,
)


def test_store_options_defaults():
    options = StoreOptions()
    assert options.file is None
    assert options.file_name == "settings.json"
    assert options.file_path is None
    assert options.append_file_path is False


def test_store_options_empty_file_name_falls_back():
    assert StoreOptions(file_name="").file_name == "settings.json"


def test_store_options_create_rejects_blank_file():
    with pytest.raises(ValueError):
        StoreOptions.create(file="   ")


def test_session_defaults_replace_zero_values():
    defaults = SessionDefaults(width=0, height=0, debounce=0)
    assert defaults.width == DEFAULT_WINDOW_WIDTH
    assert defaults.height == DEFAULT_WINDOW_HEIGHT
    assert defaults.debounce == DEFAULT_DEBOUNCE


def test_session_defaults_keep_configured_values():
    defaults = SessionDefaults(width=640, height=480, debounce=0.1)
    assert (defaults.width, defaults.height, defaults.debounce) == (640, 480, 0.1)


def test_session_defaults_reject_negative_size():
    with pytest.raises(ValueError):
        SessionDefaults(width=-1)


def test_read_document_file_returns_none_for_empty_file(tmp_path):
    path = tmp_path / "empty.json"
    path.write_text("", encoding="utf-8")
    assert read_document_file(path) is None


def test_write_and_read_json_document(tmp_path):
    path = tmp_path / "nested" / "settings.json"
    write_document_file(path, {"theme": "dark", "zoom": 1.5})

    assert json.loads(path.read_text(encoding="utf-8")) == {"theme": "dark", "zoom": 1.5}
    assert read_document_file(path) == {"theme": "dark", "zoom": 1.5}


def test_yaml_suffix_uses_yaml(tmp_path):
    path = tmp_path / "settings.yml"
    write_document_file(path, {"recent": ["a", "b"]})

    assert yaml.safe_load(path.read_text(encoding="utf-8")) == {"recent": ["a", "b"]}
    assert read_document_file(path) == {"recent": ["a", "b"]}
