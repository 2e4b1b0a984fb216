"""Grammar model: the operator catalog and its return categories.

``parse_grammar`` turns an external description into a ``Grammar``.  It is
deliberately forgiving: every problem is collected as a human-readable
message and the offending operator is dropped, so that the editor can start
with whatever could be salvaged.

Accepted description shapes (JSON text or decoded object)::

    # mapping: operator name -> argument list
    {"add": [{"name": "return", "kind": "Number"},
             {"name": "a", "kind": "number"},
             {"name": "b", "kind": "number"}]}

    # list of [operator name, argument list] pairs, arguments as pairs
    [["add", [["return", "Number"], ["a", "number"], ["b", "number"]]]]

The pseudo-argument ``return`` declares the operator's return category;
operators without it belong to ``DEFAULT_CATEGORY``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from tsformula_editor.errors import KindSyntaxError
from tsformula_editor.grammar.kinds import (
    Argument,
    Category,
    Kind,
    ListOf,
    Operator,
    Union,
)
from tsformula_editor.grammar.typeexpr import parse_kind

__all__ = ["DEFAULT_CATEGORY", "Grammar", "parse_grammar"]

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Any"
RETURN_ARG = "return"


@dataclass(frozen=True, slots=True)
class Grammar:
    """Immutable operator catalog.

    Attributes:
        operators: Operators in declaration order.  Declaration order matters:
            the first operator is the editor's initial state and the first
            operator of a category is the default at positions of that category.
    """

    operators: tuple[Operator, ...] = ()
    _by_name: dict[str, Operator] = field(
        init=False, repr=False, compare=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        for op in self.operators:
            self._by_name.setdefault(op.name, op)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self.operators)

    def operator_catalog(self) -> dict[str, Operator]:
        """Return a fresh mapping operator name -> operator shape."""
        return dict(self._by_name)

    def lookup(self, name: str) -> Operator | None:
        return self._by_name.get(name)

    def categories(self) -> list[str]:
        """Return the return categories, in order of first declaration."""
        return list(dict.fromkeys(op.category for op in self.operators))

    def operators_of(self, category: str) -> list[Operator]:
        """Return the operators that can stand at a position of ``category``."""
        return [op for op in self.operators if op.category == category]

    def default_operator(self, category: str | None = None) -> str | None:
        """Return the first declared operator name, optionally within a category.

        Returns None for an empty grammar or an unknown category.
        """
        for op in self.operators:
            if category is None or op.category == category:
                return op.name
        return None


# ---------------------------------------------------------------------------
# Description parsing
# ---------------------------------------------------------------------------


def _decode(raw: Any, errors: list[str]) -> Any:
    if isinstance(raw, bytes | bytearray):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str):
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            errors.append(f"grammar description is not valid JSON: {exc}")
            return None
    return raw


def _entries(description: Any, errors: list[str]) -> list[tuple[Any, Any]]:
    """Flatten both accepted top-level shapes into (name, arguments) pairs."""
    if isinstance(description, Mapping):
        return list(description.items())
    if isinstance(description, Sequence) and not isinstance(description, str):
        entries: list[tuple[Any, Any]] = []
        for idx, item in enumerate(description):
            if (
                isinstance(item, Sequence)
                and not isinstance(item, str)
                and len(item) == 2
            ):
                entries.append((item[0], item[1]))
            else:
                errors.append(f"entry #{idx}: expected [name, arguments], got {item!r}")
        return entries
    if description is not None:
        errors.append(
            "grammar description must be a mapping or a list, "
            f"got {type(description).__name__}"
        )
    return []


def _argument(op_name: str, raw: Any) -> tuple[str, str]:
    if isinstance(raw, Mapping):
        name, kind = raw.get("name"), raw.get("kind")
    elif isinstance(raw, Sequence) and not isinstance(raw, str) and len(raw) == 2:
        name, kind = raw
    else:
        msg = f"{op_name}: malformed argument {raw!r}"
        raise KindSyntaxError(msg)
    if not isinstance(name, str) or not name:
        raise KindSyntaxError(f"{op_name}: argument without a name: {raw!r}")
    if not isinstance(kind, str):
        raise KindSyntaxError(f"{op_name}: argument {name!r} has no kind")
    return name, kind


def _operator(name: Any, raw_args: Any, atom_aliases: bool) -> Operator:
    if not isinstance(name, str) or not name:
        raise KindSyntaxError(f"invalid operator name: {name!r}")
    if isinstance(raw_args, str) or not isinstance(raw_args, Sequence):
        raise KindSyntaxError(f"{name}: arguments must be a list, got {raw_args!r}")

    category = DEFAULT_CATEGORY
    args: list[Argument] = []
    seen: set[str] = set()
    for raw in raw_args:
        arg_name, expr = _argument(name, raw)
        try:
            kind = parse_kind(expr, atom_aliases=atom_aliases)
        except KindSyntaxError as exc:
            raise KindSyntaxError(f"{name}: argument {arg_name!r}: {exc}") from exc
        if arg_name == RETURN_ARG:
            # The return kind only names a category: "Union[...]" and
            # friends make no sense as an operator's own category.
            category = expr.strip()
            continue
        if arg_name in seen:
            raise KindSyntaxError(f"{name}: duplicate argument {arg_name!r}")
        seen.add(arg_name)
        args.append(Argument(arg_name, kind))
    return Operator(name=name, category=category, args=tuple(args))


def _referenced_categories(kind: Kind) -> set[str]:
    if isinstance(kind, Category):
        return {kind.name}
    if isinstance(kind, ListOf):
        return _referenced_categories(kind.element)
    if isinstance(kind, Union):
        found: set[str] = set()
        for candidate in kind.candidates:
            found |= _referenced_categories(candidate)
        return found
    return set()


def _prune_dangling(operators: list[Operator], errors: list[str]) -> list[Operator]:
    """Drop operators referencing categories no operator returns.

    Dropping an operator may empty another category, so this runs to a
    fixpoint.
    """
    while True:
        available = {op.category for op in operators}
        kept: list[Operator] = []
        for op in operators:
            missing = set()
            for arg in op.args:
                missing |= _referenced_categories(arg.kind) - available
            if missing:
                errors.append(
                    f"{op.name}: no operator returns {', '.join(sorted(missing))}"
                )
            else:
                kept.append(op)
        if len(kept) == len(operators):
            return kept
        operators = kept


def parse_grammar(raw: Any, *, atom_aliases: bool = False) -> tuple[list[str], Grammar]:
    """Parse a grammar description, collecting errors instead of raising.

    Args:
        raw:          JSON text, bytes, or an already decoded mapping/list.
        atom_aliases: Read capitalised spellings such as ``Number`` or
                      ``pd.Timestamp`` as atoms (see ``parse_kind``).

    Returns:
        ``(errors, grammar)``.  ``errors`` is empty for a clean description;
        otherwise ``grammar`` holds the operators that survived.
    """
    errors: list[str] = []
    entries = _entries(_decode(raw, errors), errors)

    operators: list[Operator] = []
    names: set[str] = set()
    for name, raw_args in entries:
        try:
            op = _operator(name, raw_args, atom_aliases)
        except KindSyntaxError as exc:
            errors.append(str(exc))
            continue
        if op.name in names:
            errors.append(f"{op.name}: declared twice, keeping the first declaration")
            continue
        names.add(op.name)
        operators.append(op)

    operators = _prune_dangling(operators, errors)
    if not operators:
        errors.append("grammar declares no usable operator")

    for error in errors:
        logger.warning("grammar: %s", error)
    return errors, Grammar(tuple(operators))
