"""Cursor: a zipper over immutable ``Tree`` values.

A cursor is a focused subtree plus a stack of *crumbs*, one per ancestor.
Each crumb holds the ancestor's label and the focused node's siblings on
either side: exactly what is needed to rebuild the ancestor once the focus
has changed.  There are no parent back-pointers; moving up zips one crumb
back into a fresh parent node, sharing every untouched subtree.

Every operation returns a new cursor and leaves the original untouched::

    cursor = Cursor.from_tree(tree)
    edited = cursor.follow((0, 1)).replace_label(new_label).root()
    # cursor.tree is still the old tree; edited.tree is the new one

Shape rules belong to the caller: ``replace`` accepts any subtree, so a
caller changing a node's kind must supply an already shape-correct subtree
(see ``TreeBuilder``).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from tsformula_editor.tree.nodes import Path, Tree

__all__ = ["Crumb", "Cursor"]

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Crumb(Generic[T]):
    """Reconstruction context for one ancestor of the focus.

    Attributes:
        label:  The ancestor's label.
        before: Siblings left of the focus, in tree order.
        after:  Siblings right of the focus, in tree order.
    """

    label: T
    before: tuple[Tree[T], ...]
    after: tuple[Tree[T], ...]

    def zip(self, focus: Tree[T]) -> Tree[T]:
        return Tree(self.label, (*self.before, focus, *self.after))


@dataclass(frozen=True, slots=True)
class Cursor(Generic[T]):
    """A focused position inside a tree.

    Attributes:
        tree:   The focused subtree.  A cursor always focuses a node.
        crumbs: Reconstruction contexts, outermost (root) first.
    """

    tree: Tree[T]
    crumbs: tuple[Crumb[T], ...] = ()

    @classmethod
    def from_tree(cls, tree: Tree[T]) -> Cursor[T]:
        return cls(tree)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def current(self) -> T:
        """Return the focused node's label."""
        return self.tree.label

    @property
    def depth(self) -> int:
        return len(self.crumbs)

    @property
    def index(self) -> int:
        """Position of the focus among its siblings (0 at the root)."""
        if not self.crumbs:
            return 0
        return len(self.crumbs[-1].before)

    @property
    def path(self) -> Path:
        """Child indices leading from the root to the focus."""
        return tuple(len(crumb.before) for crumb in self.crumbs)

    def parent_label(self) -> T | None:
        if not self.crumbs:
            return None
        return self.crumbs[-1].label

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def up(self) -> Cursor[T] | None:
        """Move to the parent, or return None at the root."""
        if not self.crumbs:
            return None
        *outer, crumb = self.crumbs
        return Cursor(crumb.zip(self.tree), tuple(outer))

    def root(self) -> Cursor[T]:
        """Ascend to the root, relinking every ancestor on the way."""
        focus = self.tree
        for crumb in reversed(self.crumbs):
            focus = crumb.zip(focus)
        return Cursor(focus)

    def child(self, index: int) -> Cursor[T] | None:
        """Descend to the child at ``index``, or return None if out of range."""
        children = self.tree.children
        if not 0 <= index < len(children):
            return None
        crumb = Crumb(self.tree.label, children[:index], children[index + 1 :])
        return Cursor(children[index], (*self.crumbs, crumb))

    def open(self, predicate: Callable[[T], bool]) -> Cursor[T] | None:
        """Descend to the first child whose label satisfies ``predicate``.

        Returns None when no child qualifies, e.g. on a list with no items.
        """
        for idx, child in enumerate(self.tree.children):
            if predicate(child.label):
                return self.child(idx)
        return None

    def follow(self, path: Path) -> Cursor[T] | None:
        """Descend along child indices, or return None if any step is missing."""
        cursor: Cursor[T] | None = self
        for idx in path:
            if cursor is None:
                return None
            cursor = cursor.child(idx)
        return cursor

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def replace(self, tree: Tree[T]) -> Cursor[T]:
        """Return a cursor at the same position with the focused subtree replaced."""
        return Cursor(tree, self.crumbs)

    def replace_label(self, label: T) -> Cursor[T]:
        """Replace the focused label, keeping its children."""
        return self.replace(Tree(label, self.tree.children))

    def update(self, f: Callable[[T], T]) -> Cursor[T]:
        return self.replace_label(f(self.tree.label))

    def insert(self, tree: Tree[T]) -> Cursor[T]:
        """Insert ``tree`` as the next sibling of the focus and focus it.

        At the root there is no sibling position; the cursor is returned
        unchanged.
        """
        if not self.crumbs:
            return self
        *outer, crumb = self.crumbs
        shifted = Crumb(crumb.label, (*crumb.before, self.tree), crumb.after)
        return Cursor(tree, (*outer, shifted))

    def insert_child(self, tree: Tree[T], index: int | None = None) -> Cursor[T]:
        """Insert ``tree`` among the focus's children and focus it.

        Args:
            tree:  Subtree to insert.
            index: Insertion position; None appends after the last child.
        """
        children = self.tree.children
        if index is None or index > len(children):
            index = len(children)
        index = max(index, 0)
        crumb = Crumb(self.tree.label, children[:index], children[index:])
        return Cursor(tree, (*self.crumbs, crumb))

    def delete(self, guard: Callable[[T], bool] | None = None) -> Cursor[T]:
        """Remove the focused subtree and refocus a neighbour.

        The next sibling gets the focus, else the previous one, else the
        parent.  Deleting the root is a no-op.

        Args:
            guard: Called with the parent's label; when it returns False the
                deletion is refused and the cursor is returned unchanged.
        """
        if not self.crumbs:
            return self
        *outer, crumb = self.crumbs
        if guard is not None and not guard(crumb.label):
            return self
        if crumb.after:
            focus, *rest = crumb.after
            return Cursor(focus, (*outer, Crumb(crumb.label, crumb.before, tuple(rest))))
        if crumb.before:
            *rest, focus = crumb.before
            return Cursor(focus, (*outer, Crumb(crumb.label, tuple(rest), ())))
        return Cursor(Tree(crumb.label), tuple(outer))

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------

    def map(self, f: Callable[[T], U]) -> Cursor[U]:
        """Project every label of the whole tree through ``f``.

        The returned cursor sits at the same position in the projected tree.
        It is meant for lookups (e.g. projecting edition nodes to their
        kinds); edits made through it do not affect this cursor.
        """
        crumbs = tuple(
            Crumb(
                f(crumb.label),
                tuple(t.map(f) for t in crumb.before),
                tuple(t.map(f) for t in crumb.after),
            )
            for crumb in self.crumbs
        )
        return Cursor(self.tree.map(f), crumbs)
