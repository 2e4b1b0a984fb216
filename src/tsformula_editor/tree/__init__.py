"""Tree subpackage for edition trees and their cursor.

Re-exports the public API for the tree module:
- Tree: immutable rose tree; EditionNode / EditFlags: editor-facing labels
- TreeBuilder: grammar kind -> default, shape-correct edition tree
- Cursor: zipper over a Tree with functional replace/insert/delete
- shape_violations: checks a tree against the grammar's shape rules
- validate: Atom input validation
"""

from tsformula_editor.tree.builder import DEFAULT_MAX_DEPTH, TreeBuilder
from tsformula_editor.tree.nodes import EditFlags, EditionNode, EditionTree, Path, Tree
from tsformula_editor.tree.shape import shape_violations
from tsformula_editor.tree.validation import DEFAULT_INPUTS, validate
from tsformula_editor.tree.zipper import Crumb, Cursor

__all__ = [
    "DEFAULT_INPUTS",
    "DEFAULT_MAX_DEPTH",
    "Crumb",
    "Cursor",
    "EditFlags",
    "EditionNode",
    "EditionTree",
    "Path",
    "Tree",
    "TreeBuilder",
    "shape_violations",
    "validate",
]
