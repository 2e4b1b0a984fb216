"""Tests for shape_violations, the shape-invariant checker."""

from __future__ import annotations

from tsformula_editor.grammar import Atom, Category, ValueType
from tsformula_editor.tree.builder import TreeBuilder
from tsformula_editor.tree.nodes import EditionNode, Tree
from tsformula_editor.tree.shape import shape_violations
from tsformula_editor.tree.zipper import Cursor


class TestShapeViolations:
    def test_built_tree_is_well_formed(self, ts_builder: TreeBuilder) -> None:
        assert shape_violations(ts_builder.instantiate("scale")) == []

    def test_missing_operator_argument(self, arith_builder: TreeBuilder) -> None:
        tree = arith_builder.instantiate("add")
        broken = Cursor.from_tree(tree).child(1)
        assert broken is not None
        problems = shape_violations(broken.delete().root().tree)
        assert problems == ["/: add expects 2 arguments, has 1"]

    def test_wrong_argument_kind(self, arith_builder: TreeBuilder) -> None:
        tree = arith_builder.instantiate("add")
        cursor = Cursor.from_tree(tree).child(0)
        assert cursor is not None
        wrong = Tree(EditionNode(Atom(ValueType.STR), input='"x"'))
        problems = shape_violations(cursor.replace(wrong).root().tree)
        assert problems == ["/0: expected number, got str"]

    def test_atom_with_children(self, arith_builder: TreeBuilder) -> None:
        tree = arith_builder.instantiate("const")
        atom = Cursor.from_tree(tree).child(0)
        assert atom is not None
        extra = Tree(EditionNode(Atom(ValueType.NUMBER), input="1"))
        problems = shape_violations(atom.insert_child(extra).root().tree)
        assert problems == ["/0: atom number has children"]

    def test_union_with_two_variants(self, ts_builder: TreeBuilder) -> None:
        tree = ts_builder.instantiate("scale")
        union = Cursor.from_tree(tree).child(1)
        assert union is not None
        extra = ts_builder.instantiate(Category("Number"))
        problems = shape_violations(union.insert_child(extra).root().tree)
        assert problems == ["/1: union has 2 live variants"]

    def test_list_item_of_wrong_category(self, ts_builder: TreeBuilder) -> None:
        tree = ts_builder.instantiate("add")
        items = Cursor.from_tree(tree).child(0)
        assert items is not None
        wrong = ts_builder.instantiate("const")
        problems = shape_violations(items.insert_child(wrong).root().tree)
        assert problems == ["/0/0: expected Series, got const"]

    def test_list_item_of_right_category(self, ts_builder: TreeBuilder) -> None:
        tree = ts_builder.instantiate("add")
        items = Cursor.from_tree(tree).child(0)
        assert items is not None
        item = ts_builder.instantiate("scale")
        assert shape_violations(items.insert_child(item).root().tree) == []
