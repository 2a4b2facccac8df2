"""Positional parameter substitution.

Substitution is purely structural: every atom equal to a parameter is
replaced wherever it appears in the body, including inside quoted data.
`(defun f (x) (quote (x y)))` called as `(f a)` yields `(a y)`.
"""

from __future__ import annotations

from typing import Iterable

from mclisp.types.sexpr import Atom, List, SExpr


def substitute(expr: SExpr, patterns: Iterable[SExpr], replacements: Iterable[SExpr]) -> SExpr:
    """Replace each atom of `patterns` by the replacement at the same index.

    When a pattern repeats, its first occurrence wins.
    """
    table: dict[SExpr, SExpr] = {}
    for pattern, replacement in zip(patterns, replacements):
        table.setdefault(pattern, replacement)
    if not table:
        return expr
    return _substitute(expr, table)


def _substitute(expr: SExpr, table: dict[SExpr, SExpr]) -> SExpr:
    if isinstance(expr, Atom):
        return table.get(expr, expr)
    if isinstance(expr, List):
        return List([_substitute(e, table) for e in expr.elements])
    # Closures are values
    return expr
