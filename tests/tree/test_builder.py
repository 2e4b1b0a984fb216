"""Tests for TreeBuilder.

Covers default instantiation of every node shape, category resolution,
unknown operator lookups and the depth bound on cyclic grammars.
"""

from __future__ import annotations

import pytest

from tsformula_editor.errors import GrammarError, UnknownOperator
from tsformula_editor.grammar import (
    Atom,
    Category,
    ListOf,
    NodeTag,
    Operator,
    Union,
    ValueType,
    parse_grammar,
)
from tsformula_editor.tree.builder import TreeBuilder
from tsformula_editor.tree.shape import shape_violations


class TestOperators:
    def test_one_default_child_per_argument(self, arith_builder: TreeBuilder) -> None:
        tree = arith_builder.instantiate("add")
        assert isinstance(tree.label.kind, Operator)
        assert tree.label.kind.name == "add"
        assert len(tree.children) == 2
        for child in tree.children:
            assert child.label.kind == Atom(ValueType.NUMBER)
            assert child.label.input == "0"
            assert child.label.error is None

    def test_operator_input_is_empty(self, arith_builder: TreeBuilder) -> None:
        assert arith_builder.instantiate("add").label.input == ""

    def test_instantiate_by_kind(self, arith_builder: TreeBuilder) -> None:
        op = arith_builder.grammar.lookup("const")
        assert op is not None
        assert arith_builder.instantiate(op) == arith_builder.instantiate("const")

    def test_unknown_operator_raises_lookup_error(self, arith_builder: TreeBuilder) -> None:
        with pytest.raises(UnknownOperator) as excinfo:
            arith_builder.instantiate("nope")
        assert isinstance(excinfo.value, LookupError)
        assert excinfo.value.name == "nope"

    def test_nodes_start_closed(self, arith_builder: TreeBuilder) -> None:
        tree = arith_builder.instantiate("add")
        assert all(not t.label.flags.is_open for _, t in tree.walk())


class TestCategories:
    def test_category_resolves_to_first_declared_operator(
        self, ts_builder: TreeBuilder
    ) -> None:
        tree = ts_builder.instantiate(Category("Series"))
        assert tree.label.kind == ts_builder.grammar.lookup("series")

    def test_nested_category_argument(self, ts_builder: TreeBuilder) -> None:
        tree = ts_builder.instantiate("scale")
        series, factor = tree.children
        assert isinstance(series.label.kind, Operator)
        assert series.label.kind.name == "series"
        assert series.children[0].label.input == '""'
        assert factor.label.tag == NodeTag.UNION

    def test_unknown_category_raises(self, ts_builder: TreeBuilder) -> None:
        with pytest.raises(UnknownOperator):
            ts_builder.instantiate(Category("Nope"))

    def test_resolve_reports_missing_category_as_lookup_error(
        self, ts_builder: TreeBuilder
    ) -> None:
        with pytest.raises(LookupError) as excinfo:
            ts_builder.resolve(Category("Nope"))
        assert isinstance(excinfo.value, UnknownOperator)
        assert excinfo.value.name == "Nope"

    def test_resolve_returns_operator_of_category(self, ts_builder: TreeBuilder) -> None:
        op = ts_builder.resolve(Category("Number"))
        assert isinstance(op, Operator)
        assert op.name == "const"
        number = Atom(ValueType.NUMBER)
        assert ts_builder.resolve(number) is number


class TestUnionsAndLists:
    def test_union_instantiates_first_candidate(self, ts_builder: TreeBuilder) -> None:
        tree = ts_builder.instantiate("scale")
        factor = tree.children[1]
        assert len(factor.children) == 1
        assert factor.children[0].label.kind == Atom(ValueType.NUMBER)

    def test_optional_defaults_to_its_value(self, ts_builder: TreeBuilder) -> None:
        tree = ts_builder.instantiate("slice")
        fromdate = tree.children[1]
        assert fromdate.label.kind == Union(
            (Atom(ValueType.TIMESTAMP), Atom(ValueType.NIL))
        )
        assert fromdate.children[0].label.kind == Atom(ValueType.TIMESTAMP)

    def test_list_starts_empty(self, ts_builder: TreeBuilder) -> None:
        tree = ts_builder.instantiate("add")
        items = tree.children[0]
        assert items.label.kind == ListOf(Category("Series"))
        assert items.children == ()

    @pytest.mark.parametrize("name", ["series", "add", "scale", "slice", "const", "sum", "today"])
    def test_every_operator_is_well_formed(self, ts_builder: TreeBuilder, name: str) -> None:
        assert shape_violations(ts_builder.instantiate(name)) == []


class TestDepthBound:
    def test_cyclic_default_chain_raises_grammar_error(self) -> None:
        errors, grammar = parse_grammar(
            [["neg", [["return", "Series"], ["s", "Series"]]]]
        )
        assert errors == []
        with pytest.raises(GrammarError, match="cyclic"):
            TreeBuilder(grammar, max_depth=10).instantiate("neg")

    def test_recursion_through_lists_terminates(self) -> None:
        errors, grammar = parse_grammar(
            [["group", [["return", "Series"], ["members", "List[Series]"]]]]
        )
        assert errors == []
        tree = TreeBuilder(grammar, max_depth=2).instantiate("group")
        assert tree.children[0].children == ()

    def test_non_default_cycle_is_fine(self) -> None:
        # "neg" takes a Series, but the default Series operator is "leaf".
        errors, grammar = parse_grammar(
            [
                ["leaf", [["return", "Series"]]],
                ["neg", [["return", "Series"], ["s", "Series"]]],
            ]
        )
        assert errors == []
        tree = TreeBuilder(grammar).instantiate("neg")
        assert tree.children[0].label.kind == grammar.lookup("leaf")
