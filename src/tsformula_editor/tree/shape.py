"""Shape checker for edition trees.

An edition tree is well formed when it is a valid instantiation of the
grammar:

- an Operator node has one child per declared argument, in order, each a
  valid instance of the argument's kind
- a Union node has exactly one child, an instance of one of its candidates
- a List node's children are all instances of its element kind
- an Atom node has no children

``shape_violations`` reports every breach with the path of the offending
node, so an empty list means the tree is well formed.
"""

from __future__ import annotations

from tsformula_editor.grammar.kinds import (
    Atom,
    Category,
    Kind,
    ListOf,
    Operator,
    Union,
    kind_label,
    variant_matches,
)
from tsformula_editor.tree.nodes import EditionTree, Path

__all__ = ["shape_violations"]


def _fmt(path: Path) -> str:
    return "/" + "/".join(str(i) for i in path)


def _expect(expected: Kind, tree: EditionTree, path: Path, out: list[str]) -> None:
    """Check that ``tree`` instantiates ``expected``, then recurse into it."""
    actual = tree.label.kind
    if isinstance(expected, Category) or isinstance(actual, Operator):
        ok = variant_matches(expected, actual)
    else:
        ok = expected == actual
    if not ok:
        out.append(
            f"{_fmt(path)}: expected {kind_label(expected)}, got {kind_label(actual)}"
        )
        return
    _check(tree, path, out)


def _check(tree: EditionTree, path: Path, out: list[str]) -> None:
    kind = tree.label.kind
    children = tree.children

    if isinstance(kind, Atom):
        if children:
            out.append(f"{_fmt(path)}: atom {kind.value_type} has children")
        return

    if isinstance(kind, Operator):
        if len(children) != len(kind.args):
            out.append(
                f"{_fmt(path)}: {kind.name} expects {len(kind.args)} "
                f"arguments, has {len(children)}"
            )
            return
        for idx, (arg, child) in enumerate(zip(kind.args, children, strict=True)):
            _expect(arg.kind, child, (*path, idx), out)
        return

    if isinstance(kind, Union):
        if len(children) != 1:
            out.append(f"{_fmt(path)}: union has {len(children)} live variants")
            return
        child = children[0]
        if not any(variant_matches(c, child.label.kind) for c in kind.candidates):
            out.append(
                f"{_fmt(path)}: {kind_label(child.label.kind)} is not a variant "
                f"of {kind_label(kind)}"
            )
            return
        _check(child, (*path, 0), out)
        return

    if isinstance(kind, ListOf):
        for idx, child in enumerate(children):
            _expect(kind.element, child, (*path, idx), out)
        return

    out.append(f"{_fmt(path)}: unsupported kind {kind!r}")


def shape_violations(tree: EditionTree) -> list[str]:
    """Return every shape-invariant breach in ``tree`` (empty when well formed)."""
    out: list[str] = []
    _check(tree, (), out)
    return out
