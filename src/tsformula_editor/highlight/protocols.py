"""Highlighter Protocol: the outbound boundary to the highlighting collaborator.

Users can plug in custom highlighters without inheriting from any base class.
Any class with a conformant async ``highlight`` method passes ``isinstance``
checks.

Example::

    from tsformula_editor.highlight.protocols import Highlighter

    class UpperHighlighter:
        async def highlight(self, text: str) -> str:
            return f"<pre>{text.upper()}</pre>"

    assert isinstance(UpperHighlighter(), Highlighter)  # structural conformance
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Highlighter(Protocol):
    """Structural protocol for highlighting collaborators.

    The ``highlight`` coroutine must:
    - Accept the formula text exactly as rendered.
    - Return a markup fragment (e.g. pygments HTML output).
    - Raise ``HighlightError`` on any transport or decoding failure.
    """

    async def highlight(self, text: str) -> str: ...
