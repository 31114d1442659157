from __future__ import annotations

"""Recursive-descent parser for split expressions.

Grammar::

    expr    := term (("+" | "-") term)*
    term    := unary (("*" | "/" | "%") unary)*
    unary   := ("+" | "-") unary | primary
    primary := NUMBER
             | NAME "(" [expr ("," expr)*] ")"
             | NAME
             | "[" NAME "]"
             | "(" expr ")"

``NumFolds`` / ``numFolds`` (bare or bracketed) bind to the fold count, every
other name is a record field.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

from crosseval.core.errors import ConfigError

from .functions import FUNCTIONS
from .nodes import NUM_FOLDS_NAMES, BinaryOp, Call, FieldRef, Node, Number, NumFoldsRef, UnaryOp

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<number>(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)
  | (?P<bracket>\[\s*(?P<bname>[A-Za-z_][A-Za-z0-9_]*)\s*\])
  | (?P<name>[A-Za-z_][A-Za-z0-9_]*)
  | (?P<op>[-+*/%(),])
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class Token:
    kind: str  # "number" | "bracket" | "name" | "op" | "end"
    text: str
    pos: int


def tokenize(source: str) -> List[Token]:
    tokens: List[Token] = []
    pos = 0
    while pos < len(source):
        m = _TOKEN_RE.match(source, pos)
        if m is None:
            raise ConfigError(
                f"Invalid character {source[pos]!r} at position {pos} in split expression {source!r}."
            )
        kind = m.lastgroup
        if kind == "bname":
            kind = "bracket"
        if kind == "bracket":
            tokens.append(Token("bracket", m.group("bname"), pos))
        elif kind != "ws":
            tokens.append(Token(kind, m.group(kind), pos))
        pos = m.end()
    tokens.append(Token("end", "", len(source)))
    return tokens


class _Parser:
    def __init__(self, source: str):
        self.source = source
        self.tokens = tokenize(source)
        self.i = 0

    @property
    def tok(self) -> Token:
        return self.tokens[self.i]

    def _advance(self) -> Token:
        t = self.tokens[self.i]
        self.i += 1
        return t

    def _error(self, msg: str, tok: Optional[Token] = None) -> ConfigError:
        t = tok or self.tok
        where = "end of input" if t.kind == "end" else f"{t.text!r} at position {t.pos}"
        return ConfigError(f"{msg} (got {where}) in split expression {self.source!r}.")

    def _accept(self, op: str) -> bool:
        if self.tok.kind == "op" and self.tok.text == op:
            self.i += 1
            return True
        return False

    def _expect(self, op: str) -> None:
        if not self._accept(op):
            raise self._error(f"Expected {op!r}")

    def parse(self) -> Node:
        if self.tok.kind == "end":
            raise ConfigError("Split expression is empty.")
        node = self.expr()
        if self.tok.kind != "end":
            raise self._error("Unexpected trailing input")
        return node

    def expr(self) -> Node:
        node = self.term()
        while self.tok.kind == "op" and self.tok.text in "+-":
            op = self._advance().text
            node = BinaryOp(op, node, self.term())
        return node

    def term(self) -> Node:
        node = self.unary()
        while self.tok.kind == "op" and self.tok.text in "*/%":
            op = self._advance().text
            node = BinaryOp(op, node, self.unary())
        return node

    def unary(self) -> Node:
        if self.tok.kind == "op" and self.tok.text in "+-":
            op = self._advance().text
            return UnaryOp(op, self.unary())
        return self.primary()

    def primary(self) -> Node:
        tok = self.tok
        if tok.kind == "number":
            self._advance()
            return Number(float(tok.text))
        if tok.kind == "bracket":
            self._advance()
            return _name_node(tok.text, bracketed=True)
        if tok.kind == "name":
            self._advance()
            if self._accept("("):
                return self._call(tok)
            return _name_node(tok.text, bracketed=False)
        if self._accept("("):
            node = self.expr()
            self._expect(")")
            return node
        raise self._error("Expected a number, field or '('")

    def _call(self, name_tok: Token) -> Node:
        fn = FUNCTIONS.try_get(name_tok.text)
        if fn is None:
            raise ConfigError(
                f"Unknown function {name_tok.text!r} at position {name_tok.pos} in split "
                f"expression {self.source!r}. Known: {FUNCTIONS.names()}"
            )
        args: List[Node] = []
        if not self._accept(")"):
            args.append(self.expr())
            while self._accept(","):
                args.append(self.expr())
            self._expect(")")
        if len(args) != fn.arity:
            raise ConfigError(
                f"Function {fn.name!r} takes {fn.arity} argument(s), got {len(args)} "
                f"in split expression {self.source!r}."
            )
        return Call(fn, tuple(args))


def _name_node(name: str, *, bracketed: bool) -> Node:
    if name in NUM_FOLDS_NAMES:
        return NumFoldsRef(spelling=name, bracketed=bracketed)
    return FieldRef(name, bracketed=bracketed)


def parse(source: str) -> Node:
    """Parse ``source`` into an expression tree; raise :class:`ConfigError` if malformed."""
    if not isinstance(source, str):
        raise ConfigError(f"Split expression must be a string; got {type(source).__name__}.")
    return _Parser(source).parse()
