"""Renderer: edition tree -> formula source text.

Pure and total.  Every node shape has a textual form:

- Operator -> ``name(arg1, arg2, ...)`` in declared argument order
- ListOf   -> ``[item1, item2, ...]``, ``[]`` when empty
- Union    -> the live variant
- Atom     -> the raw input, verbatim

Atom inputs are not re-validated here: an invalid literal renders exactly as
typed.
"""

from __future__ import annotations

from tsformula_editor.grammar.kinds import Atom, ListOf, Operator, Union
from tsformula_editor.tree.nodes import EditionTree
from tsformula_editor.tree.zipper import Cursor

__all__ = ["render"]


def _render(tree: EditionTree) -> str:
    kind = tree.label.kind

    if isinstance(kind, Atom):
        return tree.label.input

    if isinstance(kind, Operator):
        args = ", ".join(_render(child) for child in tree.children)
        return f"{kind.name}({args})"

    if isinstance(kind, ListOf):
        items = ", ".join(_render(child) for child in tree.children)
        return f"[{items}]"

    if isinstance(kind, Union):
        # A well-formed union has exactly one child.
        return "".join(_render(child) for child in tree.children)

    raise TypeError(f"Unsupported node kind: {kind!r}")


def render(target: EditionTree | Cursor | None) -> str:
    """Render a tree, or the whole tree a cursor points into.

    Args:
        target: An edition tree, a cursor at any position (the root is
            rendered), or None for "no tree", which renders as ``""``.

    Returns:
        The formula text.
    """
    if target is None:
        return ""
    if isinstance(target, Cursor):
        target = target.root().tree
    return _render(target)
