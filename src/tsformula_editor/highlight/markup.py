"""Code values shown in place of the formula: highlighted markup or an error.

A successful highlighting response is a small HTML fragment such as::

    <div class="highlight"><pre><span class="nf">add</span>(3, 4)</pre></div>

``Markup.parse`` keeps the fragment and also extracts its text runs as
``(css class, text)`` spans, which is enough for a non-HTML display (a
terminal, a test assertion) to reproduce the highlighting.
"""

from __future__ import annotations

from dataclasses import dataclass
from html.parser import HTMLParser

__all__ = ["Code", "Markup", "RenderError"]


class _SpanCollector(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.spans: list[tuple[str, str]] = []
        self._classes: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag == "span":
            self._classes.append(dict(attrs).get("class") or "")

    def handle_endtag(self, tag: str) -> None:
        if tag == "span" and self._classes:
            self._classes.pop()

    def handle_data(self, data: str) -> None:
        if not data:
            return
        css = self._classes[-1] if self._classes else ""
        # Merge adjacent runs of the same class.
        if self.spans and self.spans[-1][0] == css:
            self.spans[-1] = (css, self.spans[-1][1] + data)
        else:
            self.spans.append((css, data))


@dataclass(frozen=True, slots=True)
class Markup:
    """Highlighted representation of a formula.

    Attributes:
        fragment: The markup as received.
        spans:    ``(css class, text)`` runs in document order; unstyled text
                  has an empty class.
    """

    fragment: str
    spans: tuple[tuple[str, str], ...] = ()

    @classmethod
    def parse(cls, fragment: str) -> Markup:
        collector = _SpanCollector()
        collector.feed(fragment)
        collector.close()
        return cls(fragment, tuple(collector.spans))

    @property
    def text(self) -> str:
        """The plain text of the fragment, markup stripped."""
        return "".join(text for _, text in self.spans)


@dataclass(frozen=True, slots=True)
class RenderError:
    """User-visible message shown when highlighting failed."""

    message: str


Code = Markup | RenderError
