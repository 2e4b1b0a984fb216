"""Tests for the HighlightCache LRU proxy."""

from __future__ import annotations

import asyncio

import pytest

from tsformula_editor.errors import HighlightError
from tsformula_editor.highlight.cache import HighlightCache
from tsformula_editor.highlight.protocols import Highlighter


class _CountingHighlighter:
    def __init__(self, fail: bool = False) -> None:
        self.calls: list[str] = []
        self.fail = fail

    async def highlight(self, text: str) -> str:
        self.calls.append(text)
        if self.fail:
            raise HighlightError("highlighting failed: HTTP 503")
        return f"<pre>{text}</pre>"


class TestHighlightCache:
    def test_second_request_is_a_hit(self) -> None:
        inner = _CountingHighlighter()
        cache = HighlightCache(inner)

        async def go() -> tuple[str, str]:
            return await cache.highlight("a"), await cache.highlight("a")

        first, second = asyncio.run(go())
        assert first == second == "<pre>a</pre>"
        assert inner.calls == ["a"]
        assert "a" in cache
        assert cache.curr_size == 1

    def test_lru_eviction(self) -> None:
        inner = _CountingHighlighter()
        cache = HighlightCache(inner, max_size=2)

        async def go() -> None:
            for text in ("a", "b", "c"):
                await cache.highlight(text)

        asyncio.run(go())
        assert cache.max_size == 2
        assert cache.curr_size == 2
        assert "a" not in cache
        assert "c" in cache

    def test_failures_are_not_cached(self) -> None:
        inner = _CountingHighlighter(fail=True)
        cache = HighlightCache(inner)

        async def go() -> None:
            for _ in range(2):
                with pytest.raises(HighlightError):
                    await cache.highlight("a")

        asyncio.run(go())
        assert inner.calls == ["a", "a"]
        assert cache.curr_size == 0

    def test_instances_are_isolated(self) -> None:
        first = HighlightCache(_CountingHighlighter())
        second = HighlightCache(_CountingHighlighter())
        asyncio.run(first.highlight("a"))
        assert "a" in first
        assert "a" not in second

    def test_satisfies_protocol(self) -> None:
        assert isinstance(HighlightCache(_CountingHighlighter()), Highlighter)

    def test_aclose_without_inner_aclose(self) -> None:
        asyncio.run(HighlightCache(_CountingHighlighter()).aclose())
