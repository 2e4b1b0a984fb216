"""HighlightCache: LRU-backed caching proxy for any Highlighter.

Wraps any Highlighter-conformant object and transparently caches markup per
formula text.  A text already highlighted never reaches the collaborator
again, which matters when the user toggles back and forth between two
formulas.  LRU eviction occurs silently when ``max_size`` is exceeded.

Failures are not cached: a text whose request failed is retried the next
time it is submitted.

Each ``HighlightCache`` instance maintains its own ``LRUCache``; there is
no class-level shared state.

Example::

    cache = HighlightCache(HttpHighlighter("http://localhost:5000"), max_size=128)
    await cache.highlight("add(3, 4)")   # hits the server
    await cache.highlight("add(3, 4)")   # served from memory
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from cachetools import LRUCache

if TYPE_CHECKING:
    from tsformula_editor.highlight.protocols import Highlighter


class HighlightCache:
    """LRU-backed caching proxy around any Highlighter.

    Satisfies the ``Highlighter`` Protocol structurally.

    Args:
        highlighter: Any object satisfying the ``Highlighter`` Protocol.
        max_size: Maximum number of formula texts to hold.  Defaults to 128.
    """

    def __init__(self, highlighter: Highlighter, max_size: int = 128) -> None:
        self._highlighter: Any = highlighter
        self._cache: LRUCache[str, str] = LRUCache(maxsize=max_size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    def __contains__(self, text: object) -> bool:
        return text in self._cache

    # ------------------------------------------------------------------
    # Highlighter Protocol surface
    # ------------------------------------------------------------------

    async def highlight(self, text: str) -> str:
        """Return the markup for ``text``; only unseen texts hit the collaborator.

        Raises:
            HighlightError: Propagated from the wrapped highlighter.
        """
        cached = self._cache.get(text)
        if cached is not None:
            return cached
        markup: str = await self._highlighter.highlight(text)
        self._cache[text] = markup
        return markup

    async def aclose(self) -> None:
        close = getattr(self._highlighter, "aclose", None)
        if close is not None:
            await close()
