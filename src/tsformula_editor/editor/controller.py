"""EditorController: orchestrator that wires Grammar + TreeBuilder + Cursor + Highlighter.

This is the single owner of an editing session's state:

- ``tree``: the live edition tree (None when the grammar has no usable operator)
- ``formula``: ``current`` text rendered from the tree, ``rendered`` text last
  sent to the highlighter, and the ``code`` to display

Architecture:
- ``dispatch()`` applies one edit event: it opens a cursor at the event's
  path, mutates through it, zips back to the root, re-renders and stores the
  text in ``formula.current``.  It never talks to the highlighter.
- ``tick()`` is the render tick.  When ``current != rendered`` it sets
  ``rendered := current`` and schedules exactly one highlighting request.
  Edits made between two ticks therefore cost a single request carrying the
  settled text.
- Highlighting responses are applied to ``formula.code`` in completion
  order.  A slow response may overwrite the result of a newer request; the
  next tick re-requests once the texts diverge again.  In-flight requests are
  never cancelled.

Everything runs on one event loop, so no locking is needed.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from tsformula_editor.editor.config import EditorConfig
from tsformula_editor.editor.events import (
    ChooseRoot,
    EditEvent,
    ListAdd,
    ListRemove,
    SelectOperator,
    SelectVariant,
    SetInput,
    ToggleOpen,
)
from tsformula_editor.editor.views import NodeView, node_views
from tsformula_editor.errors import GrammarError, HighlightError, UnknownOperator
from tsformula_editor.grammar.kinds import (
    Atom,
    Kind,
    ListOf,
    Operator,
    Union,
    kind_label,
    variant_matches,
)
from tsformula_editor.grammar.model import Grammar, parse_grammar
from tsformula_editor.highlight.cache import HighlightCache
from tsformula_editor.highlight.http import HttpHighlighter
from tsformula_editor.highlight.markup import Code, Markup, RenderError
from tsformula_editor.highlight.static import PlainHighlighter
from tsformula_editor.render import render
from tsformula_editor.tree.builder import TreeBuilder
from tsformula_editor.tree.nodes import EditionNode, EditionTree, Tree
from tsformula_editor.tree.validation import validate
from tsformula_editor.tree.zipper import Cursor

if TYPE_CHECKING:
    from tsformula_editor.highlight.protocols import Highlighter

__all__ = ["EditorController", "Formula"]

logger = logging.getLogger(__name__)

EditionCursor = Cursor[EditionNode]


@dataclass(slots=True)
class Formula:
    """Rendering and highlighting state.

    Attributes:
        current:  Text rendered from the live tree after the latest edit.
        rendered: Text most recently sent to the highlighter.
        code:     What to display: highlighted markup, an error message, or
                  None before the first response.
    """

    current: str = ""
    rendered: str = ""
    code: Code | None = None

    @property
    def is_dirty(self) -> bool:
        return self.current != self.rendered


def _default_highlighter(config: EditorConfig) -> Highlighter:
    if config.base_url:
        return HttpHighlighter(config.base_url, timeout=config.request_timeout)
    return PlainHighlighter()


class EditorController:
    """Owner of one editing session.

    Example::

        controller = EditorController.start(description)
        controller.dispatch(SetInput((0,), "3"))
        controller.formula.current      # "add(3, 0)"

        async def main():
            task = controller.tick()    # one highlighting request
            await task
            controller.formula.code     # Markup(...)
    """

    def __init__(
        self,
        grammar: Grammar,
        config: EditorConfig | None = None,
        highlighter: Highlighter | None = None,
        errors: list[str] | None = None,
    ) -> None:
        """Initialise the session with the grammar's default operator.

        Args:
            grammar:     Operator catalog, passed explicitly.
            config:      Session settings.  Defaults to ``EditorConfig()``.
            highlighter: A Highlighter-conformant object.  Defaults to an
                ``HttpHighlighter`` when ``config.base_url`` is set, else to a
                ``PlainHighlighter``.  Wrapped in a ``HighlightCache`` when
                ``config.cache_size`` is positive.
            errors:      Startup errors to expose (e.g. from ``parse_grammar``).
        """
        self._config: EditorConfig = config if config is not None else EditorConfig()
        self._grammar = grammar
        self._builder = TreeBuilder(grammar, max_depth=self._config.max_depth)

        raw: Any = highlighter if highlighter is not None else _default_highlighter(self._config)
        if self._config.cache_size > 0:
            raw = HighlightCache(raw, max_size=self._config.cache_size)
        self._highlighter: Any = raw
        self._pending: set[asyncio.Task[None]] = set()

        self.errors: list[str] = list(errors or [])
        self.tree: EditionTree | None = None
        self.formula = Formula()

        name = grammar.default_operator()
        if name is not None:
            try:
                self.tree = self._builder.instantiate(name)
            except GrammarError as exc:
                logger.error("cannot instantiate %r: %s", name, exc)
                self.errors.append(str(exc))
        self.formula.current = render(self.tree)

    @classmethod
    def start(
        cls,
        description: Any,
        config: EditorConfig | None = None,
        highlighter: Highlighter | None = None,
    ) -> EditorController:
        """Parse a grammar description and start a session on it.

        Never raises on a bad description: problems end up in ``errors`` and
        the session runs on whatever could be salvaged.
        """
        config = config if config is not None else EditorConfig()
        errors, grammar = parse_grammar(description, atom_aliases=config.atom_aliases)
        return cls(grammar, config=config, highlighter=highlighter, errors=errors)

    # ------------------------------------------------------------------
    # Read-only surface for the presentation layer
    # ------------------------------------------------------------------

    @property
    def grammar(self) -> Grammar:
        return self._grammar

    @property
    def config(self) -> EditorConfig:
        return self._config

    def root_choices(self) -> list[str]:
        """Operator names selectable for the whole formula (``ChooseRoot``)."""
        return [op.name for op in self._grammar.operators]

    def views(self) -> list[NodeView]:
        return node_views(self.tree, self._grammar)

    def view(self, path: tuple[int, ...]) -> NodeView | None:
        for view in self.views():
            if view.path == path:
                return view
        return None

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def dispatch(self, event: EditEvent) -> bool:
        """Apply one edit event.

        Returns:
            True if the tree changed.  Lookup misses (unknown operator or
            variant, stale path, wrong node shape) change nothing and return
            False.
        """
        logger.debug("dispatch %r", event)
        if isinstance(event, ChooseRoot):
            tree = self._choose_root(event.name)
        elif self.tree is None:
            return False
        else:
            cursor = Cursor.from_tree(self.tree).follow(event.path)
            if cursor is None:
                logger.info("no node at %s, ignoring %r", event.path, event)
                return False
            edited = self._apply(cursor, event)
            tree = edited.root().tree if edited is not None else None

        if tree is None or tree == self.tree:
            return False
        self.tree = tree
        self.formula.current = render(tree)
        return True

    def _apply(self, cursor: EditionCursor, event: EditEvent) -> EditionCursor | None:
        if isinstance(event, SelectOperator):
            return self._select_operator(cursor, event.name)
        if isinstance(event, SelectVariant):
            return self._select_variant(cursor, event.choice)
        if isinstance(event, SetInput):
            return self._set_input(cursor, event.text)
        if isinstance(event, ToggleOpen):
            return cursor.update(EditionNode.toggled)
        if isinstance(event, ListAdd):
            return self._list_add(cursor)
        if isinstance(event, ListRemove):
            return self._list_remove(cursor)
        raise TypeError(f"Unsupported event: {event!r}")

    def _fresh(self, target: Kind | str) -> EditionTree | None:
        try:
            return self._builder.instantiate(target)
        except (UnknownOperator, GrammarError) as exc:
            logger.warning("cannot instantiate %r: %s", target, exc)
            return None

    def _choose_root(self, name: str) -> EditionTree | None:
        if name not in self._grammar:
            logger.info("unknown operator %r, keeping the current formula", name)
            return None
        return self._fresh(name)

    def _select_operator(self, cursor: EditionCursor, name: str) -> EditionCursor | None:
        node = cursor.current()
        kind = node.kind
        if not isinstance(kind, Operator):
            logger.info("%s is not an operator position", cursor.path)
            return None
        op = self._grammar.lookup(name)
        if op is None or op.category != kind.category:
            logger.info("no %s operator named %r, keeping %r", kind.category, name, kind.name)
            return None
        if op.name == kind.name:
            return None
        # Changing the operator invalidates its old arguments.
        fresh = self._fresh(op)
        if fresh is None:
            return None
        return cursor.replace(Tree(EditionNode(op, flags=node.flags), fresh.children))

    def _select_variant(self, cursor: EditionCursor, choice: str) -> EditionCursor | None:
        kind = cursor.current().kind
        if not isinstance(kind, Union):
            logger.info("%s is not a union", cursor.path)
            return None
        wanted = choice.strip()
        candidate = next((c for c in kind.candidates if kind_label(c) == wanted), None)
        if candidate is None:
            logger.info("%r is not a variant of %s, keeping the live one", choice, kind_label(kind))
            return None

        live = cursor.open(lambda _: True)
        if live is not None and variant_matches(candidate, live.current().kind):
            return None
        fresh = self._fresh(candidate)
        if fresh is None:
            return None
        if live is None:
            return cursor.insert_child(fresh)
        return live.replace(fresh)

    def _set_input(self, cursor: EditionCursor, text: str) -> EditionCursor:
        node = cursor.current()
        if isinstance(node.kind, Atom):
            normalized, error = validate(node.kind.value_type, text)
            return cursor.replace_label(node.with_input(normalized, error))
        return cursor.replace_label(node.with_input(text))

    def _list_add(self, cursor: EditionCursor) -> EditionCursor | None:
        kind = cursor.current().kind
        if isinstance(kind, ListOf):
            fresh = self._fresh(kind.element)
            return cursor.insert_child(fresh) if fresh is not None else None

        parent = cursor.parent_label()
        if parent is not None and isinstance(parent.kind, ListOf):
            fresh = self._fresh(parent.kind.element)
            return cursor.insert(fresh) if fresh is not None else None

        logger.info("%s is neither a list nor a list item", cursor.path)
        return None

    def _list_remove(self, cursor: EditionCursor) -> EditionCursor | None:
        edited = cursor.delete(guard=lambda parent: parent.is_list)
        if edited is cursor:
            logger.info("%s is not a list item, nothing removed", cursor.path)
            return None
        return edited

    # ------------------------------------------------------------------
    # Render tick
    # ------------------------------------------------------------------

    def tick(self) -> asyncio.Task[None] | None:
        """Send the current text for highlighting if it changed since the last tick.

        Must be called from a running event loop.

        Returns:
            The scheduled request task, or None when the formula is clean.
        """
        if not self.formula.is_dirty:
            return None
        text = self.formula.current
        self.formula.rendered = text
        logger.debug("render tick: highlighting %d chars", len(text))
        task = asyncio.get_running_loop().create_task(self._highlight(text))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _highlight(self, text: str) -> None:
        try:
            markup = await self._highlighter.highlight(text)
        except HighlightError as exc:
            logger.warning("%s", exc)
            self.formula.code = RenderError(str(exc))
            return
        except Exception as exc:
            # Any failure is displayed, never raised.
            logger.exception("highlighter %r failed", self._highlighter)
            self.formula.code = RenderError(f"highlighting failed: {exc!r}")
            return
        self.formula.code = Markup.parse(markup)

    async def run(self) -> None:
        """Tick every ``config.tick_interval`` seconds until cancelled."""
        while True:
            self.tick()
            await asyncio.sleep(self._config.tick_interval)

    async def aclose(self) -> None:
        """Wait for in-flight requests, then release the highlighter."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
        close = getattr(self._highlighter, "aclose", None)
        if close is not None:
            await close()
