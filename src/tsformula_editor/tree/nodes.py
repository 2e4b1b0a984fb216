"""Tree and EditionNode: the persistent data structures of the editor.

``Tree`` is a generic, immutable rose tree: a label plus an ordered tuple of
children.  An *edition tree* is a ``Tree[EditionNode]``: every node carries
its grammar shape (``kind``) together with editor state (raw input, open
flag, validation outcome).

Trees are never mutated.  All edits go through ``Cursor`` (see
``tsformula_editor.tree.zipper``), which rebuilds the ancestors of a changed
node and shares every untouched subtree with the previous version.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, replace
from typing import Generic, TypeVar

from tsformula_editor.grammar.kinds import (
    Atom,
    ListOf,
    NodeKind,
    NodeTag,
    Operator,
    Union,
)

__all__ = ["EditFlags", "EditionNode", "EditionTree", "Path", "Tree"]

T = TypeVar("T")
U = TypeVar("U")

# Child indices from the root; () is the root itself.
Path = tuple[int, ...]


@dataclass(frozen=True, slots=True)
class Tree(Generic[T]):
    """An immutable rose tree.

    Attributes:
        label:    Payload of this node.
        children: Child subtrees, in order.
    """

    label: T
    children: tuple[Tree[T], ...] = ()

    def map(self, f: Callable[[T], U]) -> Tree[U]:
        """Return a tree of the same shape with ``f`` applied to every label."""
        return Tree(f(self.label), tuple(child.map(f) for child in self.children))

    def at(self, path: Path) -> Tree[T] | None:
        """Return the subtree at ``path``, or None if the path does not exist."""
        node = self
        for idx in path:
            if not 0 <= idx < len(node.children):
                return None
            node = node.children[idx]
        return node

    def walk(self, path: Path = ()) -> Iterator[tuple[Path, Tree[T]]]:
        """Yield ``(path, subtree)`` pairs in pre-order."""
        yield path, self
        for idx, child in enumerate(self.children):
            yield from child.walk((*path, idx))

    def size(self) -> int:
        return 1 + sum(child.size() for child in self.children)


@dataclass(frozen=True, slots=True)
class EditFlags:
    is_open: bool = False


@dataclass(frozen=True, slots=True)
class EditionNode:
    """Label of an edition tree node.

    Attributes:
        kind:  Structural identity of the node (never a ``Category``).
        input: Raw text typed by the user.  Only meaningful for ``Atom`` nodes;
               ignored by the renderer everywhere else.
        flags: Presentation state.
        error: Validation message for the current ``input``, None when valid.
               Invalid input is stored as typed, never rejected.
    """

    kind: NodeKind
    input: str = ""
    flags: EditFlags = EditFlags()
    error: str | None = None

    @property
    def tag(self) -> NodeTag:
        if isinstance(self.kind, Atom):
            return NodeTag.ATOM
        if isinstance(self.kind, Operator):
            return NodeTag.OPERATOR
        if isinstance(self.kind, Union):
            return NodeTag.UNION
        if isinstance(self.kind, ListOf):
            return NodeTag.LIST
        raise TypeError(f"Unsupported node kind: {self.kind!r}")

    @property
    def is_list(self) -> bool:
        return isinstance(self.kind, ListOf)

    @property
    def is_valid(self) -> bool:
        return self.error is None

    def with_input(self, text: str, error: str | None = None) -> EditionNode:
        return replace(self, input=text, error=error)

    def toggled(self) -> EditionNode:
        return replace(self, flags=EditFlags(is_open=not self.flags.is_open))


EditionTree = Tree[EditionNode]
