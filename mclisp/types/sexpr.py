"""S-expression values for mclisp.

Program and data share one representation:

    - Atom(text)     -> opaque leaf token
    - List(elements) -> ordered, immutable sequence of S-expressions
    - Closure(...)   -> function value produced by lambda and defun

Equality is structural. The empty list NIL doubles as false, nil and
"no match"; TRUE is the canonical truth value returned by predicates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from io import StringIO
from typing import Any, Iterable, Iterator, Optional, Union


@dataclass(frozen=True, slots=True)
class Atom:
    text: str

    def __str__(self) -> str:
        return f"{self.text} "

    def __repr__(self) -> str:
        return f"Atom({self.text!r})"


@dataclass(frozen=True, slots=True, init=False)
class List:
    elements: tuple = ()

    def __init__(self, elements: Iterable[SExpr] = ()):
        object.__setattr__(self, "elements", tuple(elements))

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[SExpr]:
        return iter(self.elements)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return List(self.elements[index])
        return self.elements[index]

    def __bool__(self) -> bool:
        return bool(self.elements)

    def __str__(self) -> str:
        with StringIO() as buffer:
            _write(buffer, self)
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"List([{', '.join(repr(e) for e in self.elements)}])"


@dataclass(frozen=True, slots=True)
class Closure:
    """A function value: parameter atoms, a body, and the defining environment.

    `name` is set for closures registered by defun and None for lambdas.
    The captured environment is not part of equality.
    """

    params: tuple
    body: Any
    name: Optional[str] = None
    env: Any = field(default=None, compare=False, repr=False)

    def __call__(self, env, form: List) -> SExpr:
        # Lazy import: evaluation depends on this module
        from mclisp.evaluation.evaluator import evaluate
        from mclisp.evaluation.apply import apply_closure

        return apply_closure(self, form, env, evaluate)

    def as_form(self) -> List:
        """Return the lambda form that rebuilds this closure."""
        return List([Atom("lambda"), List(self.params), self.body])

    def __str__(self) -> str:
        return str(self.as_form())


SExpr = Union[Atom, List, Closure]

NIL = List()
TRUE = Atom("true")


def _write(buffer: StringIO, node: SExpr) -> None:
    """Write the display form of `node`; every list element carries one trailing space.

    Uses an explicit stack of pending nodes and literal strings, so nesting
    depth is not bounded by the host recursion limit.
    """
    pending: list = [node]
    while pending:
        item = pending.pop()
        if isinstance(item, str):
            buffer.write(item)
            continue
        if isinstance(item, Atom):
            buffer.write(item.text)
            buffer.write(" ")
            continue
        if isinstance(item, Closure):
            item = item.as_form()
        buffer.write("(")
        pending.append(")")
        for child in reversed(item.elements):
            if not isinstance(child, Atom):
                pending.append(" ")
            pending.append(child)


def to_string(node: SExpr) -> str:
    """Display rendering: `(A (B C))` -> `(A (B C ) )`, `A` -> `A `.

    Reading the result back gives an equal tree unless an atom contains
    whitespace or parentheses: the reader splits `Atom("a\\tb")` into two atoms.
    """
    return str(node)


def is_nil(node: SExpr) -> bool:
    return isinstance(node, List) and not node.elements
