"""Shared grammar descriptions and fixtures.

Two grammars are used throughout the suite:

- ``ARITH``: the two-operator arithmetic grammar (``add``/``const``) in the
  mapping-of-dicts shape.
- ``TIMESERIES``: a small time-series grammar in the list-of-pairs shape,
  exercising categories, unions, optional arguments and lists.
"""

from __future__ import annotations

import copy
from typing import Any

import pytest

from tsformula_editor.grammar import Grammar, parse_grammar
from tsformula_editor.tree import TreeBuilder

ARITH: dict[str, Any] = {
    "add": [
        {"name": "return", "kind": "Number"},
        {"name": "a", "kind": "number"},
        {"name": "b", "kind": "number"},
    ],
    "const": [
        {"name": "return", "kind": "Number"},
        {"name": "v", "kind": "number"},
    ],
}

TIMESERIES: list[Any] = [
    ["series", [["return", "Series"], ["name", "str"]]],
    ["add", [["return", "Series"], ["series", "List[Series]"]]],
    [
        "scale",
        [["return", "Series"], ["series", "Series"], ["factor", "Union[number, Number]"]],
    ],
    [
        "slice",
        [["return", "Series"], ["series", "Series"], ["fromdate", "Optional[timestamp]"]],
    ],
    ["const", [["return", "Number"], ["v", "number"]]],
    ["sum", [["return", "Number"], ["items", "List[Number]"]]],
    ["today", [["return", "Date"], ["naive", "bool"]]],
]


def _parse(description: Any) -> Grammar:
    errors, grammar = parse_grammar(description)
    assert errors == []
    return grammar


@pytest.fixture
def arith() -> Grammar:
    """The add/const grammar."""
    return _parse(ARITH)


@pytest.fixture
def timeseries() -> Grammar:
    """The time-series grammar."""
    return _parse(TIMESERIES)


@pytest.fixture
def arith_builder(arith: Grammar) -> TreeBuilder:
    return TreeBuilder(arith)


@pytest.fixture
def ts_builder(timeseries: Grammar) -> TreeBuilder:
    return TreeBuilder(timeseries)


@pytest.fixture
def arith_description() -> dict[str, Any]:
    return copy.deepcopy(ARITH)


@pytest.fixture
def ts_description() -> list[Any]:
    return copy.deepcopy(TIMESERIES)
