"""Exception hierarchy for tsformula-editor.

Only fatal conditions raise.  Grammar problems found while parsing a
description are collected as strings instead (see ``parse_grammar``), and
highlighting failures are turned into a ``RenderError`` code value by the
controller.
"""

from __future__ import annotations

__all__ = [
    "FormulaEditorError",
    "GrammarError",
    "HighlightError",
    "KindSyntaxError",
    "UnknownOperator",
]


class FormulaEditorError(Exception):
    """Base class for every error raised by this package."""


class GrammarError(FormulaEditorError, ValueError):
    """The grammar cannot be instantiated (e.g. a cyclic default operator chain)."""


class UnknownOperator(FormulaEditorError, LookupError):
    """An operator name does not resolve in the operator catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unknown operator: {name!r}")
        self.name = name


class HighlightError(FormulaEditorError):
    """The highlighting collaborator failed (transport error or malformed body)."""


class KindSyntaxError(GrammarError):
    """An argument kind expression is malformed (e.g. ``List[number``)."""
