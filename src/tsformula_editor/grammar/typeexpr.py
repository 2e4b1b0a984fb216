"""Parser for argument kind expressions found in grammar descriptions.

Grammar::

    kind  := NAME
           | "Union"    "[" kind ("," kind)* "]"
           | "List"     "[" kind "]"
           | "Optional" "[" kind "]"

Lower-case names that spell a ``ValueType`` are atoms; every other name is a
return category.  ``Optional[k]`` is sugar for ``Union[k, nil]``.

Example::

    parse_kind("Union[number, Series]")
    # Union(candidates=(Atom(NUMBER), Category("Series")))
"""

from __future__ import annotations

import re

from tsformula_editor.errors import KindSyntaxError
from tsformula_editor.grammar.kinds import (
    Atom,
    Category,
    Kind,
    ListOf,
    Union,
    ValueType,
)

__all__ = ["parse_kind"]

# Names may be dotted (e.g. "pd.Timestamp") and may contain digits after
# the first character.
_TOKEN = re.compile(r"\s*(?:([A-Za-z_][\w.]*)|(\[)|(\])|(,))")

_VALUE_TYPES = {str(v): v for v in ValueType}

# Python-flavoured spellings emitted by formula servers that introspect
# their operators' signatures.
_ALIASES: dict[str, ValueType] = {
    "Number": ValueType.NUMBER,
    "Int": ValueType.INT,
    "Float": ValueType.FLOAT,
    "Str": ValueType.STR,
    "Bool": ValueType.BOOL,
    "Timestamp": ValueType.TIMESTAMP,
    "pd.Timestamp": ValueType.TIMESTAMP,
    "None": ValueType.NIL,
    "NoneType": ValueType.NIL,
}


def _tokenize(expr: str) -> list[str]:
    tokens: list[str] = []
    pos = 0
    end = len(expr.rstrip())
    while pos < end:
        match = _TOKEN.match(expr, pos)
        if match is None:
            msg = f"unexpected character {expr[pos:].strip()[:1]!r} in {expr!r}"
            raise KindSyntaxError(msg)
        tokens.append(match.group(match.lastindex or 0))
        pos = match.end()
    return tokens


class _Parser:
    def __init__(self, expr: str, atom_aliases: bool) -> None:
        self._expr = expr
        self._tokens = _tokenize(expr)
        self._pos = 0
        self._atom_aliases = atom_aliases

    def parse(self) -> Kind:
        kind = self._kind()
        if self._pos != len(self._tokens):
            msg = f"trailing input {self._tokens[self._pos]!r} in {self._expr!r}"
            raise KindSyntaxError(msg)
        return kind

    def _peek(self) -> str | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _next(self) -> str:
        token = self._peek()
        if token is None:
            raise KindSyntaxError(f"unexpected end of {self._expr!r}")
        self._pos += 1
        return token

    def _expect(self, token: str) -> None:
        found = self._next()
        if found != token:
            raise KindSyntaxError(f"expected {token!r}, got {found!r} in {self._expr!r}")

    def _params(self) -> list[Kind]:
        self._expect("[")
        params = [self._kind()]
        while self._peek() == ",":
            self._next()
            params.append(self._kind())
        self._expect("]")
        return params

    def _kind(self) -> Kind:
        name = self._next()
        if name in ("[", "]", ","):
            raise KindSyntaxError(f"expected a name, got {name!r} in {self._expr!r}")

        if self._peek() != "[":
            return self._name(name)

        params = self._params()
        if name == "Union":
            return Union(tuple(params))
        if name == "Optional":
            if len(params) != 1:
                raise KindSyntaxError(f"Optional takes one parameter in {self._expr!r}")
            return Union((params[0], Atom(ValueType.NIL)))
        if name == "List":
            if len(params) != 1:
                raise KindSyntaxError(f"List takes one parameter in {self._expr!r}")
            return ListOf(params[0])
        raise KindSyntaxError(f"unknown type constructor {name!r} in {self._expr!r}")

    def _name(self, name: str) -> Kind:
        if name in _VALUE_TYPES:
            return Atom(_VALUE_TYPES[name])
        if self._atom_aliases and name in _ALIASES:
            return Atom(_ALIASES[name])
        return Category(name)


def parse_kind(expr: str, *, atom_aliases: bool = False) -> Kind:
    """Parse a kind expression.

    Args:
        expr:         The expression, e.g. ``"List[Series]"``.
        atom_aliases: Also read capitalised Python spellings (``Number``,
                      ``pd.Timestamp``...) as atoms instead of categories.

    Returns:
        The parsed kind.  Union candidates keep their declared order.

    Raises:
        KindSyntaxError: If the expression is malformed.
    """
    if not isinstance(expr, str) or not expr.strip():
        raise KindSyntaxError(f"empty kind expression: {expr!r}")
    return _Parser(expr, atom_aliases).parse()
