"""tsformula-editor - structural editor for time-series formulas."""

from __future__ import annotations

from tsformula_editor.editor import (
    ChooseRoot,
    EditorConfig,
    EditorController,
    Formula,
    ListAdd,
    ListRemove,
    NodeView,
    SelectOperator,
    SelectVariant,
    SetInput,
    ToggleOpen,
)
from tsformula_editor.errors import (
    FormulaEditorError,
    GrammarError,
    HighlightError,
    UnknownOperator,
)
from tsformula_editor.grammar import Grammar, parse_grammar
from tsformula_editor.render import render
from tsformula_editor.tree import Cursor, TreeBuilder

__version__: str = "0.1.0"
__all__: list[str] = [
    "ChooseRoot",
    "Cursor",
    "EditorConfig",
    "EditorController",
    "Formula",
    "FormulaEditorError",
    "Grammar",
    "GrammarError",
    "HighlightError",
    "ListAdd",
    "ListRemove",
    "NodeView",
    "SelectOperator",
    "SelectVariant",
    "SetInput",
    "ToggleOpen",
    "TreeBuilder",
    "UnknownOperator",
    "parse_grammar",
    "render",
]
