"""Built-in operations for the mclisp runtime environment.

Every operation receives the environment and the whole call form, operator
included, so `(car x)` arrives as a two-element list. A form of the wrong
length or shape evaluates to NIL rather than raising: in this dialect the
empty list stands for false, nil and failure alike.
"""
from __future__ import annotations

from types import MappingProxyType

from mclisp.types.environment import Environment
from mclisp.types.sexpr import Atom, List, NIL, TRUE, SExpr
from mclisp.evaluation.special_forms import SPECIAL_FORMS


def car(env: Environment, form: List) -> SExpr:
    """First element of a non-empty list; NIL otherwise."""
    if len(form) != 2:
        return NIL
    xs = form[1]
    if isinstance(xs, List) and xs:
        return xs[0]
    return NIL


def cdr(env: Environment, form: List) -> SExpr:
    """All but the first element; NIL for lists shorter than two."""
    if len(form) != 2:
        return NIL
    xs = form[1]
    if isinstance(xs, List) and len(xs) > 1:
        return xs[1:]
    return NIL


def cons(env: Environment, form: List) -> SExpr:
    """Prepend an atom to a list; any other combination is NIL."""
    if len(form) != 3:
        return NIL
    head, tail = form[1], form[2]
    if isinstance(head, Atom) and isinstance(tail, List):
        return List((head, *tail.elements))
    return NIL


def is_equal(a: SExpr, b: SExpr) -> bool:
    """Deep structural equality, element-wise for lists."""
    if a is b:
        return True
    if isinstance(a, List) and isinstance(b, List):
        if len(a) != len(b):
            return False
        for x, y in zip(a, b):
            if not is_equal(x, y):
                return False
        return True
    if type(a) != type(b):
        return False
    return a == b


def equal(env: Environment, form: List) -> SExpr:
    if len(form) != 3:
        return NIL
    return TRUE if is_equal(form[1], form[2]) else NIL


def atom(env: Environment, form: List) -> SExpr:
    if len(form) != 2:
        return NIL
    return TRUE if isinstance(form[1], Atom) else NIL


def list_builtin(env: Environment, form: List) -> SExpr:
    """Concatenate arguments: lists are spliced one level, anything else is appended."""
    if len(form) < 2:
        return NIL
    result: list[SExpr] = []
    for item in form.elements[1:]:
        if isinstance(item, List):
            result.extend(item.elements)
        else:
            result.append(item)
    return List(result)


BUILTINS = MappingProxyType(
    {
        **SPECIAL_FORMS,
        "car": car,
        "cdr": cdr,
        "cons": cons,
        "equal": equal,
        "atom": atom,
        "list": list_builtin,
    }
)


def register(env: Environment) -> None:
    """Register all builtin operations into the user table of `env`.

    Used to restore the core operations in an environment that was built
    with a custom builtin table.
    """
    env.update(BUILTINS)
