"""Edit events dispatched by the presentation layer.

Each event addresses its target node by ``path``: the child indices from the
root, as exposed by ``NodeView.path``.  An event whose path no longer exists
(e.g. a stale click after a list item was removed) is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass

from tsformula_editor.tree.nodes import Path

__all__ = [
    "ChooseRoot",
    "EditEvent",
    "ListAdd",
    "ListRemove",
    "SelectOperator",
    "SelectVariant",
    "SetInput",
    "ToggleOpen",
]


@dataclass(frozen=True, slots=True)
class SelectOperator:
    """Switch the operator at ``path`` to ``name`` (same return category)."""

    path: Path
    name: str


@dataclass(frozen=True, slots=True)
class SelectVariant:
    """Make ``choice`` (a candidate label) the live variant of the union at ``path``."""

    path: Path
    choice: str


@dataclass(frozen=True, slots=True)
class SetInput:
    path: Path
    text: str


@dataclass(frozen=True, slots=True)
class ToggleOpen:
    path: Path


@dataclass(frozen=True, slots=True)
class ListAdd:
    """Add a default item: appended when ``path`` is a list, after the item otherwise."""

    path: Path


@dataclass(frozen=True, slots=True)
class ListRemove:
    """Remove the list item at ``path``."""

    path: Path


@dataclass(frozen=True, slots=True)
class ChooseRoot:
    """Replace the whole tree with a fresh instance of operator ``name``."""

    name: str


EditEvent = (
    SelectOperator
    | SelectVariant
    | SetInput
    | ToggleOpen
    | ListAdd
    | ListRemove
    | ChooseRoot
)
