"""NodeView: what the presentation layer needs to draw and edit one node.

The presentation layer never inspects tree internals.  For each node it
gets a flat, immutable ``NodeView`` telling it which control to draw:

- OPERATOR : a selector over ``choices`` (operators of the same category)
- UNION    : a selector over ``choices`` (candidate labels), ``label`` is live
- LIST     : an "add" affordance; items carry ``removable=True``
- ATOM     : a free-text input holding ``input``, flagged by ``error``

and which ``path`` to put in the edit events it dispatches back.
"""

from __future__ import annotations

from dataclasses import dataclass

from tsformula_editor.grammar.kinds import (
    Atom,
    ListOf,
    NodeTag,
    Operator,
    Union,
    kind_label,
    variant_matches,
)
from tsformula_editor.grammar.model import Grammar
from tsformula_editor.tree.nodes import EditionTree, Path

__all__ = ["NodeView", "node_views"]


@dataclass(frozen=True, slots=True)
class NodeView:
    """Presentation-facing description of one edition tree node.

    Attributes:
        path:      Address of the node, to be echoed in edit events.
        tag:       Which of the four node shapes this is.
        label:     Operator name, live variant label, value type, or list
                   kind label (``List[Series]``).
        choices:   Selectable labels for OPERATOR and UNION nodes, else empty.
        argument:  Name of the operator argument this node fills, if any.
        input:     Raw text of an ATOM node, else empty.
        error:     Validation message of an ATOM node's input.
        is_open:   Folding state.
        removable: True for list items.
        children:  Paths of the node's children.
    """

    path: Path
    tag: NodeTag
    label: str
    choices: tuple[str, ...] = ()
    argument: str | None = None
    input: str = ""
    error: str | None = None
    is_open: bool = False
    removable: bool = False
    children: tuple[Path, ...] = ()


def _label_and_choices(tree: EditionTree, grammar: Grammar) -> tuple[str, tuple[str, ...]]:
    kind = tree.label.kind
    if isinstance(kind, Operator):
        choices = tuple(op.name for op in grammar.operators_of(kind.category))
        return kind.name, choices
    if isinstance(kind, Union):
        choices = tuple(kind_label(c) for c in kind.candidates)
        live = ""
        if tree.children:
            child_kind = tree.children[0].label.kind
            for candidate in kind.candidates:
                if variant_matches(candidate, child_kind):
                    live = kind_label(candidate)
                    break
        return live, choices
    if isinstance(kind, ListOf | Atom):
        return kind_label(kind), ()
    raise TypeError(f"Unsupported node kind: {kind!r}")


def _collect(
    tree: EditionTree,
    grammar: Grammar,
    path: Path,
    argument: str | None,
    removable: bool,
    out: list[NodeView],
) -> None:
    node = tree.label
    label, choices = _label_and_choices(tree, grammar)
    out.append(
        NodeView(
            path=path,
            tag=node.tag,
            label=label,
            choices=choices,
            argument=argument,
            input=node.input if node.tag == NodeTag.ATOM else "",
            error=node.error,
            is_open=node.flags.is_open,
            removable=removable,
            children=tuple((*path, idx) for idx in range(len(tree.children))),
        )
    )

    kind = node.kind
    for idx, child in enumerate(tree.children):
        child_argument = None
        if isinstance(kind, Operator) and idx < len(kind.args):
            child_argument = kind.args[idx].name
        _collect(child, grammar, (*path, idx), child_argument, node.is_list, out)


def node_views(tree: EditionTree | None, grammar: Grammar) -> list[NodeView]:
    """Return one view per node, in pre-order (a parent precedes its children)."""
    out: list[NodeView] = []
    if tree is not None:
        _collect(tree, grammar, (), None, False, out)
    return out
