"""
  Lisp Reader: tokenizer and recursive-descent parser

- `(` and `)` are always standalone tokens
- whitespace separates text runs and is otherwise dropped
- every other run of characters is an opaque atom: there is no string,
  number or quote syntax, so `42`, `"abc"` and `'x` are plain atoms

Trees are built from Atom and List values:

    (car (quote (A B)))  ->  List([Atom('car'), List([Atom('quote'), List([Atom('A'), Atom('B')])])])
"""

from __future__ import annotations

from typing import Iterator, Optional

from mclisp import config
from mclisp.errors import UnbalancedParentheses, MalformedTopLevel, RecursionDepthExceeded
from mclisp.host_stack import recursion_budget
from mclisp.types.sexpr import Atom, List, NIL, SExpr

Token = tuple[str, str]


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields (token_type, token_value) tuples."""
    run: list[str] = []
    for ch in source:
        if ch == "(" or ch == ")" or ch.isspace():
            if run:
                yield "symbol", "".join(run)
                run = []
            if ch == "(":
                yield "lparen", ch
            elif ch == ")":
                yield "rparen", ch
            continue
        run.append(ch)
    if run:
        yield "symbol", "".join(run)


class TokenStream:
    def __init__(self, token_iter: Iterator[Token], max_depth: Optional[int] = None):
        self.tokens = iter(token_iter)
        self.max_depth = max_depth if max_depth is not None else config.get_max_depth()

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        return next(self.tokens, (None, None))

    def parse_expr(self) -> Optional[SExpr]:
        """Parse one form; None when the stream is exhausted."""
        tok_type, tok_val = self.advance()
        if tok_type is None:
            return None
        if tok_type == "rparen":
            raise UnbalancedParentheses("Unexpected ')' with no open list")
        if tok_type == "lparen":
            return self.parse_list([], 1)
        return Atom(tok_val)

    def parse_list(self, items: list[SExpr], depth: int) -> List:
        """Fill the accumulator `items` until its matching ')' and return it as a List."""
        if depth > self.max_depth:
            raise RecursionDepthExceeded(self.max_depth, f"List nesting deeper than {self.max_depth}")
        while True:
            tok_type, tok_val = self.advance()
            if tok_type is None:
                raise UnbalancedParentheses("Unmatched '(': input ended before ')'")
            if tok_type == "rparen":
                return List(items)
            if tok_type == "lparen":
                items.append(self.parse_list([], depth + 1))
            else:
                items.append(Atom(tok_val))

    def parse_all(self) -> Iterator[SExpr]:
        while (expr := self.parse_expr()) is not None:
            yield expr

    def read_forms(self) -> list[SExpr]:
        """Parse every remaining form, sizing the host stack for max_depth."""
        with recursion_budget(self.max_depth):
            try:
                return list(self.parse_all())
            except RecursionError as ex:
                raise RecursionDepthExceeded(
                    self.max_depth, "Host recursion limit reached while reading"
                ) from ex


def read_all(source: str, max_depth: Optional[int] = None) -> list[SExpr]:
    """Return every top-level form of `source`, in order."""
    return TokenStream(lex(source), max_depth).read_forms()


def read(source: str, max_depth: Optional[int] = None) -> SExpr:
    """Read exactly one form.

    Blank input reads as the empty list. More than one top-level form
    (stray atoms such as `A B C`, or `(a) (b)`) raises MalformedTopLevel.
    """
    forms = read_all(source, max_depth)
    if not forms:
        return NIL
    if len(forms) > 1:
        raise MalformedTopLevel(f"Expected a single top-level form, found {len(forms)}")
    return forms[0]
