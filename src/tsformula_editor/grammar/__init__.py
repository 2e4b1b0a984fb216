"""Grammar subpackage: node kinds, kind expressions and the operator catalog.

Re-exports the public API for the grammar module:
- NodeKind variants: Atom, Operator, Union, ListOf (plus the Category reference)
- ValueType / NodeTag: StrEnums for atom value types and node shapes
- Grammar: immutable operator catalog
- parse_grammar: description -> (errors, Grammar), never raises
- parse_kind: kind expression parser
"""

from tsformula_editor.grammar.kinds import (
    Argument,
    Atom,
    Category,
    Kind,
    ListOf,
    NodeKind,
    NodeTag,
    Operator,
    Union,
    ValueType,
    kind_label,
    variant_matches,
)
from tsformula_editor.grammar.model import DEFAULT_CATEGORY, Grammar, parse_grammar
from tsformula_editor.grammar.typeexpr import parse_kind

__all__ = [
    "DEFAULT_CATEGORY",
    "Argument",
    "Atom",
    "Category",
    "Grammar",
    "Kind",
    "ListOf",
    "NodeKind",
    "NodeTag",
    "Operator",
    "Union",
    "ValueType",
    "kind_label",
    "parse_grammar",
    "parse_kind",
    "variant_matches",
]
