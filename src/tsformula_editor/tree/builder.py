"""TreeBuilder: instantiates grammar kinds into default edition trees.

Uses recursive dispatch over the node kind:

- Operator : one default child per declared argument, in declared order
- Category : resolved to the category's default (first declared) operator
- Union    : one child, the first candidate
- ListOf   : no children (an empty list is valid)
- Atom     : no children, the value type's default input

The grammar must not be cyclic along default choices (e.g. a category whose
default operator takes an argument of that same category).  That is a
precondition, not something the grammar parser checks, so instantiation is
bounded by ``max_depth`` and fails with ``GrammarError`` past it.
"""

from __future__ import annotations

from dataclasses import dataclass

from tsformula_editor.errors import GrammarError, UnknownOperator
from tsformula_editor.grammar.kinds import (
    Atom,
    Category,
    Kind,
    ListOf,
    NodeKind,
    Operator,
    Union,
)
from tsformula_editor.grammar.model import Grammar
from tsformula_editor.tree.nodes import EditionNode, EditionTree, Tree
from tsformula_editor.tree.validation import DEFAULT_INPUTS

__all__ = ["DEFAULT_MAX_DEPTH", "TreeBuilder"]

DEFAULT_MAX_DEPTH = 64


@dataclass(frozen=True, slots=True)
class TreeBuilder:
    """Builds shape-correct edition trees from a Grammar.

    The grammar is passed explicitly so the builder holds no ambient state and
    two builders over different grammars never interfere.

    Example::

        errors, grammar = parse_grammar({"const": [["v", "number"]]})
        tree = TreeBuilder(grammar).instantiate("const")
        # tree: Operator(const) -> Atom(number, input="0")
    """

    grammar: Grammar
    max_depth: int = DEFAULT_MAX_DEPTH

    def instantiate(self, target: Kind | str) -> EditionTree:
        """Build the default tree for a kind or an operator name.

        Args:
            target: A kind from the grammar, or an operator name looked up in
                the operator catalog.

        Returns:
            A fresh edition tree whose shape matches the grammar.

        Raises:
            UnknownOperator: If ``target`` names no operator, or is a Category
                no operator returns.
            GrammarError: If default instantiation recurses past ``max_depth``.
        """
        if isinstance(target, str):
            op = self.grammar.lookup(target)
            if op is None:
                raise UnknownOperator(target)
            target = op
        return self._build(target, 0)

    def resolve(self, kind: Kind) -> NodeKind:
        """Resolve a Category reference to its default Operator."""
        if not isinstance(kind, Category):
            return kind
        name = self.grammar.default_operator(kind.name)
        if name is None:
            raise UnknownOperator(kind.name)
        op = self.grammar.lookup(name)
        if op is None:
            raise UnknownOperator(name)
        return op

    def _build(self, kind: Kind, depth: int) -> EditionTree:
        if depth > self.max_depth:
            msg = (
                f"default instantiation exceeds depth {self.max_depth} "
                f"at {kind!r}: is the grammar cyclic?"
            )
            raise GrammarError(msg)

        node_kind = self.resolve(kind)

        if isinstance(node_kind, Atom):
            return Tree(EditionNode(node_kind, input=DEFAULT_INPUTS[node_kind.value_type]))

        if isinstance(node_kind, Operator):
            children = tuple(self._build(arg.kind, depth + 1) for arg in node_kind.args)
            return Tree(EditionNode(node_kind), children)

        if isinstance(node_kind, Union):
            if not node_kind.candidates:
                raise GrammarError("Union without candidates")
            variant = self._build(node_kind.candidates[0], depth + 1)
            return Tree(EditionNode(node_kind), (variant,))

        if isinstance(node_kind, ListOf):
            return Tree(EditionNode(node_kind))

        raise TypeError(f"Unsupported kind: {kind!r}")
