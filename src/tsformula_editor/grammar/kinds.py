"""NodeKind sum type: the grammar's vocabulary of node shapes.

A formula tree is made of four node shapes:

- ``Atom``     : a leaf holding one raw input string of a given ``ValueType``
- ``Operator`` : an n-ary named constructor with ordered, named arguments
- ``Union``    : exactly one live variant among a fixed list of candidates
- ``ListOf``   : zero or more homogeneous items, order significant

Grammar descriptions may also mention a ``Category`` (the return category of
a family of operators, e.g. ``Series``).  A category is a *reference*, not a
shape: the TreeBuilder resolves it to the category's default ``Operator``, so
edition trees never contain one.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import NamedTuple

__all__ = [
    "Argument",
    "Atom",
    "Category",
    "Kind",
    "ListOf",
    "NodeKind",
    "NodeTag",
    "Operator",
    "Union",
    "ValueType",
    "kind_label",
    "variant_matches",
]


class ValueType(StrEnum):
    """Value types an Atom can hold.

    StrEnum values are the lowercased member names, which are also the
    spellings used in grammar descriptions (``number``, ``str``, ...).
    """

    NUMBER = auto()
    INT = auto()
    FLOAT = auto()
    STR = auto()
    BOOL = auto()
    TIMESTAMP = auto()
    NIL = auto()


class NodeTag(StrEnum):
    """Discriminant of the four node shapes, used by the presentation layer."""

    ATOM = auto()
    OPERATOR = auto()
    UNION = auto()
    LIST = auto()


@dataclass(frozen=True, slots=True)
class Category:
    """Reference to "any operator returning ``name``"."""

    name: str


@dataclass(frozen=True, slots=True)
class Atom:
    value_type: ValueType


class Argument(NamedTuple):
    name: str
    kind: Kind


@dataclass(frozen=True, slots=True)
class Operator:
    """A named constructor.

    Attributes:
        name:     Operator name, as rendered (``add`` in ``add(1, 2)``).
        category: Return category.  Only operators of the same category can
                  replace each other at a given position.
        args:     Declared arguments, in rendering order.
    """

    name: str
    category: str
    args: tuple[Argument, ...] = ()


@dataclass(frozen=True, slots=True)
class Union:
    candidates: tuple[Kind, ...]


@dataclass(frozen=True, slots=True)
class ListOf:
    element: Kind


NodeKind = Atom | Operator | Union | ListOf
Kind = NodeKind | Category


def kind_label(kind: Kind) -> str:
    """Return the display label of a kind.

    Labels are what a Union's variant selector shows and accepts, and they
    round-trip with the kind expression syntax of grammar descriptions:
    ``number``, ``Series``, ``List[Series]``, ``Union[number, Series]``.
    """
    if isinstance(kind, Atom):
        return str(kind.value_type)
    if isinstance(kind, Category):
        return kind.name
    if isinstance(kind, Operator):
        return kind.name
    if isinstance(kind, ListOf):
        return f"List[{kind_label(kind.element)}]"
    if isinstance(kind, Union):
        inner = ", ".join(kind_label(c) for c in kind.candidates)
        return f"Union[{inner}]"
    raise TypeError(f"Unsupported kind: {kind!r}")


def variant_matches(candidate: Kind, instance: NodeKind) -> bool:
    """Return True if an instantiated node of kind ``instance`` is a ``candidate``.

    A Category candidate is matched by any Operator of that category, since
    the operator at a category position can be switched by the user.
    """
    if isinstance(candidate, Category):
        return isinstance(instance, Operator) and instance.category == candidate.name
    if isinstance(candidate, Operator) and isinstance(instance, Operator):
        return candidate.category == instance.category
    return candidate == instance
