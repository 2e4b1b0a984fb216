"""Tests for Highlighter Protocol conformance.

Verifies that:
- User-defined classes with a conformant ``highlight`` method satisfy the Protocol.
- Classes without ``highlight`` do not satisfy it.
- Bundled highlighters satisfy it structurally, without inheritance.
"""

from __future__ import annotations

from tsformula_editor.highlight import (
    HighlightCache,
    Highlighter,
    HttpHighlighter,
    PlainHighlighter,
)


class _UserHighlighter:
    async def highlight(self, text: str) -> str:
        return f"<pre>{text.upper()}</pre>"


class _WrongNameHighlighter:
    async def pygmentize(self, text: str) -> str:
        return text


def test_user_defined_highlighter_passes_isinstance():
    assert isinstance(_UserHighlighter(), Highlighter) is True


def test_wrong_method_name_fails_isinstance():
    assert isinstance(_WrongNameHighlighter(), Highlighter) is False


def test_bundled_highlighters_satisfy_protocol():
    for highlighter in (
        PlainHighlighter(),
        HttpHighlighter("http://localhost:5000"),
        HighlightCache(PlainHighlighter()),
    ):
        assert isinstance(highlighter, Highlighter) is True
