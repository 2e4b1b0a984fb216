"""Tests for EditorConfig validation."""

from __future__ import annotations

import dataclasses

import pytest

from tsformula_editor.editor.config import EditorConfig
from tsformula_editor.tree import DEFAULT_MAX_DEPTH


class TestEditorConfig:
    def test_defaults(self) -> None:
        config = EditorConfig()
        assert config.base_url == ""
        assert config.tick_interval == 1.0
        assert config.request_timeout == 10.0
        assert config.max_depth == DEFAULT_MAX_DEPTH
        assert config.cache_size == 0
        assert config.atom_aliases is False

    def test_frozen(self) -> None:
        config = EditorConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.tick_interval = 2.0  # type: ignore[misc]

    def test_accepts_https_base_url(self) -> None:
        assert EditorConfig(base_url="https://example.org/api").base_url.endswith("/api")

    @pytest.mark.parametrize(
        ("field", "value", "match"),
        [
            ("base_url", "example.org", "base_url"),
            ("tick_interval", 0.0, "tick_interval"),
            ("request_timeout", -1.0, "request_timeout"),
            ("max_depth", 0, "max_depth"),
            ("cache_size", -1, "cache_size"),
        ],
    )
    def test_rejects_invalid_values(self, field: str, value: object, match: str) -> None:
        with pytest.raises(ValueError, match=match):
            EditorConfig(**{field: value})  # type: ignore[arg-type]

    def test_zero_cache_size_is_allowed(self) -> None:
        assert EditorConfig(cache_size=0).cache_size == 0
