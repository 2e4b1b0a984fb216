"""PlainHighlighter: offline highlighter with no network dependency.

Produces the same envelope as a pygments HTML formatter, without any token
styling.  It is the controller's default when no collaborator is configured,
so the editor always has something to display.
"""

from __future__ import annotations

import html


class PlainHighlighter:
    """Wraps html-escaped text in ``<div class="highlight"><pre>...</pre></div>``.

    Satisfies the ``Highlighter`` Protocol structurally.
    """

    async def highlight(self, text: str) -> str:
        return f'<div class="highlight"><pre>{html.escape(text)}</pre></div>'
