# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

r"""Parser for the SPDX license expressions found in package metadata.

Package manifests declare licenses as SPDX expressions such as
``MIT``, ``(MIT OR Apache-2.0)`` or ``GPL-2.0+ WITH Bison-exception-2.2``.
The classifier needs the structure of the expression, not just the
string, because ``OR`` lets the consumer pick a branch while ``AND``
imposes every branch.

Operator precedence (tightest to loosest)::

    +  >  WITH  >  AND  >  OR

Operators are accepted in all-upper or all-lower case.

Usage::

    from embedkit.spdx_expr import parse, license_ids, Or, LicenseId

    expr = parse('MIT OR (Apache-2.0 AND BSD-3-Clause)')
    assert isinstance(expr, Or)
    assert expr.left == LicenseId('MIT')
    assert license_ids(expr) == {'MIT', 'Apache-2.0', 'BSD-3-Clause'}
"""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = [
    'And',
    'ExprNode',
    'LicenseId',
    'LicenseRef',
    'Or',
    'ParseError',
    'With',
    'license_ids',
    'parse',
]


@dataclass(frozen=True)
class LicenseId:
    """A short license identifier, optionally with the ``+`` suffix.

    Attributes:
        id: Identifier as written (e.g. ``"MIT"``, ``"GPL-3.0-only"``).
        or_later: ``True`` if the ``+`` suffix was present.
    """

    id: str
    or_later: bool = False

    def __str__(self) -> str:
        """Return the identifier, with ``+`` if or-later."""
        return f'{self.id}+' if self.or_later else self.id


@dataclass(frozen=True)
class LicenseRef:
    """A user-defined ``LicenseRef-...`` reference."""

    ref: str

    def __str__(self) -> str:
        """Return the reference string."""
        return self.ref


@dataclass(frozen=True)
class With:
    """``license WITH exception``."""

    license: LicenseId | LicenseRef
    exception: str

    def __str__(self) -> str:
        """Return ``license WITH exception``."""
        return f'{self.license} WITH {self.exception}'


@dataclass(frozen=True)
class And:
    """Conjunction: the consumer must comply with both sides."""

    left: ExprNode
    right: ExprNode

    def __str__(self) -> str:
        """Return ``left AND right``, parenthesizing nested ``OR``."""
        parts = [f'({side})' if isinstance(side, Or) else str(side) for side in (self.left, self.right)]
        return ' AND '.join(parts)


@dataclass(frozen=True)
class Or:
    """Disjunction: the consumer may pick either side."""

    left: ExprNode
    right: ExprNode

    def __str__(self) -> str:
        """Return ``left OR right``."""
        return f'{self.left} OR {self.right}'


ExprNode = LicenseId | LicenseRef | With | And | Or


class ParseError(ValueError):
    """Raised when a license expression cannot be parsed.

    Attributes:
        expression: The expression being parsed.
        position: Character offset of the problem.
    """

    def __init__(self, expression: str, position: int, detail: str) -> None:
        self.expression = expression
        self.position = position
        super().__init__(f'SPDX parse error at position {position}: {detail}\n  {expression}\n  {" " * position}^')


_TOKEN_RE = re.compile(
    r'''
    \s*
    (?:
        (?P<op>AND|and|OR|or|WITH|with)(?![A-Za-z0-9.\-])
      | (?P<paren>[()])
      | (?P<id>[A-Za-z0-9.\-:]+)(?P<plus>\+)?
    )
    ''',
    re.VERBOSE,
)


@dataclass(frozen=True)
class _Token:
    kind: str  # 'AND' | 'OR' | 'WITH' | '(' | ')' | 'ID' | 'EOF'
    text: str
    pos: int
    plus: bool = False


def _tokenize(expr: str) -> list[_Token]:
    tokens: list[_Token] = []
    pos = 0
    end = len(expr.rstrip())
    while pos < end:
        m = _TOKEN_RE.match(expr, pos)
        if m is None or m.end() == pos:
            offset = pos + (len(expr[pos:]) - len(expr[pos:].lstrip()))
            raise ParseError(expr, offset, f'unexpected character {expr[offset]!r}')
        if m.group('op'):
            tokens.append(_Token(m.group('op').upper(), m.group('op'), m.start('op')))
        elif m.group('paren'):
            tokens.append(_Token(m.group('paren'), m.group('paren'), m.start('paren')))
        else:
            tokens.append(_Token('ID', m.group('id'), m.start('id'), plus=m.group('plus') is not None))
        pos = m.end()
    tokens.append(_Token('EOF', '', len(expr)))
    return tokens


class _Parser:
    """Recursive descent over the token list.

    Grammar::

        or_expr   = and_expr ("OR" and_expr)*
        and_expr  = with_expr ("AND" with_expr)*
        with_expr = atom ("WITH" ID)?
        atom      = "(" or_expr ")" | ID "+"?
    """

    def __init__(self, expr: str) -> None:
        self._expr = expr
        self._tokens = _tokenize(expr)
        self._i = 0

    @property
    def _tok(self) -> _Token:
        return self._tokens[self._i]

    def _take(self, kind: str) -> _Token:
        tok = self._tok
        if tok.kind != kind:
            raise ParseError(self._expr, tok.pos, f'expected {kind}, got {tok.kind} {tok.text!r}')
        self._i += 1
        return tok

    def parse(self) -> ExprNode:
        node = self._or_expr()
        if self._tok.kind != 'EOF':
            raise ParseError(self._expr, self._tok.pos, f'unexpected {self._tok.text!r} after expression')
        return node

    def _or_expr(self) -> ExprNode:
        node = self._and_expr()
        while self._tok.kind == 'OR':
            self._i += 1
            node = Or(node, self._and_expr())
        return node

    def _and_expr(self) -> ExprNode:
        node = self._with_expr()
        while self._tok.kind == 'AND':
            self._i += 1
            node = And(node, self._with_expr())
        return node

    def _with_expr(self) -> ExprNode:
        node = self._atom()
        if self._tok.kind == 'WITH':
            with_tok = self._take('WITH')
            if not isinstance(node, (LicenseId, LicenseRef)):
                raise ParseError(self._expr, with_tok.pos, 'WITH needs a single license on its left')
            node = With(node, self._take('ID').text)
        return node

    def _atom(self) -> ExprNode:
        if self._tok.kind == '(':
            self._i += 1
            node = self._or_expr()
            self._take(')')
            return node
        tok = self._take('ID')
        if 'LicenseRef-' in tok.text:
            return LicenseRef(tok.text)
        return LicenseId(tok.text, or_later=tok.plus)


def parse(expression: str) -> ExprNode:
    """Parse an SPDX license expression.

    Raises:
        ParseError: If *expression* is empty or malformed.
    """
    if not expression or not expression.strip():
        raise ParseError(expression or '', 0, 'empty expression')
    return _Parser(expression).parse()


def license_ids(node: ExprNode) -> set[str]:
    """Collect every license identifier in *node* (without ``+``)."""
    if isinstance(node, LicenseId):
        return {node.id}
    if isinstance(node, LicenseRef):
        return {node.ref}
    if isinstance(node, With):
        return license_ids(node.license)
    return license_ids(node.left) | license_ids(node.right)
