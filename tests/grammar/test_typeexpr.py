"""Tests for the kind expression parser."""

from __future__ import annotations

import pytest

from tsformula_editor.errors import KindSyntaxError
from tsformula_editor.grammar.kinds import (
    Atom,
    Category,
    ListOf,
    Union,
    ValueType,
    kind_label,
)
from tsformula_editor.grammar.typeexpr import parse_kind


class TestNames:
    @pytest.mark.parametrize("value_type", list(ValueType))
    def test_value_type_spellings_are_atoms(self, value_type: ValueType) -> None:
        assert parse_kind(str(value_type)) == Atom(value_type)

    def test_other_names_are_categories(self) -> None:
        assert parse_kind("Series") == Category("Series")

    def test_dotted_name_is_a_category_by_default(self) -> None:
        assert parse_kind("pd.Timestamp") == Category("pd.Timestamp")

    def test_aliases_read_as_atoms_when_enabled(self) -> None:
        assert parse_kind("Number", atom_aliases=True) == Atom(ValueType.NUMBER)
        assert parse_kind("pd.Timestamp", atom_aliases=True) == Atom(ValueType.TIMESTAMP)

    def test_surrounding_whitespace_is_ignored(self) -> None:
        assert parse_kind("  number ") == Atom(ValueType.NUMBER)


class TestConstructors:
    def test_list(self) -> None:
        assert parse_kind("List[Series]") == ListOf(Category("Series"))

    def test_union_keeps_candidate_order(self) -> None:
        kind = parse_kind("Union[number, Series, str]")
        assert kind == Union(
            (Atom(ValueType.NUMBER), Category("Series"), Atom(ValueType.STR))
        )

    def test_optional_is_union_with_nil(self) -> None:
        assert parse_kind("Optional[int]") == Union(
            (Atom(ValueType.INT), Atom(ValueType.NIL))
        )

    def test_nested(self) -> None:
        kind = parse_kind("List[Union[number, List[Series]]]")
        assert kind == ListOf(
            Union((Atom(ValueType.NUMBER), ListOf(Category("Series"))))
        )

    def test_label_round_trip(self) -> None:
        expr = "Union[number, List[Series]]"
        assert kind_label(parse_kind(expr)) == expr


class TestErrors:
    @pytest.mark.parametrize(
        "expr",
        [
            "",
            "   ",
            "List[number",
            "List[]",
            "List[number, str]",
            "Optional[number, str]",
            "Dict[str]",
            "number]",
            "Union[number,]",
            "List<number>",
            "[number]",
        ],
    )
    def test_malformed_expressions_raise(self, expr: str) -> None:
        with pytest.raises(KindSyntaxError):
            parse_kind(expr)

    def test_error_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_kind("List[")
