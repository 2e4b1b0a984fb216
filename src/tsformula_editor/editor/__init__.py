"""Editor subpackage: the session controller and its presentation boundary.

Re-exports:
- EditorController / Formula: session state, edit dispatch and render tick
- EditorConfig: immutable session settings
- NodeView: per-node description consumed by the presentation layer
- edit events: SelectOperator, SelectVariant, SetInput, ToggleOpen,
  ListAdd, ListRemove, ChooseRoot
"""

from tsformula_editor.editor.config import EditorConfig
from tsformula_editor.editor.controller import EditorController, Formula
from tsformula_editor.editor.events import (
    ChooseRoot,
    EditEvent,
    ListAdd,
    ListRemove,
    SelectOperator,
    SelectVariant,
    SetInput,
    ToggleOpen,
)
from tsformula_editor.editor.views import NodeView, node_views

__all__ = [
    "ChooseRoot",
    "EditEvent",
    "EditorConfig",
    "EditorController",
    "Formula",
    "ListAdd",
    "ListRemove",
    "NodeView",
    "SelectOperator",
    "SelectVariant",
    "SetInput",
    "ToggleOpen",
    "node_views",
]
