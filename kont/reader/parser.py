"""
  Reader: lexer and s-expression parser

- Streaming, lazy parsing
- Emits Python primitives instead of cons cells:

    - lists   -> Python list
    - symbols -> Symbol
    - numbers -> int
    - #t / #f -> bool

The result is plain data; kont.reader.syntax turns it into AST nodes.
"""

from __future__ import annotations

import re
import sys
from typing import Iterator, Optional

from kont.errors import KontSyntaxError


class Symbol:
    __slots__ = ("id",)

    def __init__(self, name: str):
        self.id = sys.intern(name)

    def __eq__(self, other) -> bool:
        return isinstance(other, Symbol) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self):
        return f"Symbol({self.id!r})"

    def __str__(self):
        return self.id


TOKEN_RE = re.compile(
    r"\s*("
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>[(\[])"  # ( or [
    r"|(?P<rparen>[)\]])"  # ) or ]
    r"|(?P<boolean>#[tf](?![^\s()\[\];]))"  # #t / #f
    r"|(?P<symbol>[^\s()\[\];]+)"  # fallback: symbols and numbers
    r")",
)

INT_RE = re.compile(r"[-+]?\d+")


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        if source[pos].isspace():
            pos += 1
            continue
        m = TOKEN_RE.match(source, pos)
        if not m or m.end() == pos:
            raise KontSyntaxError(f"Unexpected char at {pos}: {source[pos]!r}")
        pos = m.end()
        for nm in TOKEN_RE.groupindex:
            if m.group(nm):
                if nm != "comment":
                    yield nm, m.group(nm)
                break


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def parse_expr(self):
        tok_type, tok_val = self.advance()
        if tok_type is None:
            raise KontSyntaxError("Unexpected end of input")

        if tok_type == "symbol":
            if INT_RE.fullmatch(tok_val):
                return int(tok_val)
            return Symbol(tok_val)

        if tok_type == "boolean":
            return tok_val == "#t"

        if tok_type == "lparen":
            items = []
            while True:
                nxt, _ = self.peek()
                if nxt is None:
                    raise KontSyntaxError("Unmatched '('")
                if nxt == "rparen":
                    self.advance()
                    return items
                items.append(self.parse_expr())

        raise KontSyntaxError(f"Unexpected token: {tok_type} {tok_val}")

    def parse_all(self) -> Iterator:
        while self.peek()[0] is not None:
            yield self.parse_expr()
