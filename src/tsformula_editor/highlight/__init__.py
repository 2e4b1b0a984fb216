"""Highlight subpackage for the highlighting collaborator.

The base install provides ``PlainHighlighter`` (offline) and
``HttpHighlighter`` (remote pygments rendering via httpx), plus the
``HighlightCache`` LRU proxy.  All highlighters satisfy the ``Highlighter``
Protocol structurally.
"""

from tsformula_editor.highlight.cache import HighlightCache
from tsformula_editor.highlight.http import ENDPOINT, HttpHighlighter
from tsformula_editor.highlight.markup import Code, Markup, RenderError
from tsformula_editor.highlight.protocols import Highlighter
from tsformula_editor.highlight.static import PlainHighlighter

__all__ = [
    "ENDPOINT",
    "Code",
    "HighlightCache",
    "Highlighter",
    "HttpHighlighter",
    "Markup",
    "PlainHighlighter",
    "RenderError",
]
