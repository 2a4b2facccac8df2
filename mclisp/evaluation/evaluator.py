"""Core evaluator for mclisp.

Reduces a tree to a result tree against an Environment:

- Atoms and closures evaluate to themselves.
- Special forms (quote, cond, defun, lambda) receive their operands unevaluated.
- Any other list has its list elements evaluated left to right, then the
  operator named by its head is applied to the rebuilt list.
- A list whose head names no operator is returned as is (self-quoting).
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from mclisp.errors import RecursionDepthExceeded, UnknownOperator
from mclisp.host_stack import recursion_budget
from mclisp.types.environment import Environment
from mclisp.types.sexpr import Atom, Closure, List, SExpr
from mclisp.evaluation.apply import apply_closure


@lru_cache(maxsize=None)
def special_form_names() -> frozenset[str]:
    """Operators whose operands are not pre-evaluated."""
    # Lazy import: the special form handlers call back into this module
    from mclisp.evaluation.special_forms import SPECIAL_FORMS

    return frozenset(SPECIAL_FORMS)


def evaluate(expr: SExpr, env: Optional[Environment] = None) -> SExpr:
    """
    Evaluate `expr` in `env`, or in a fresh standard environment when none is given.

    Raises RecursionDepthExceeded when nesting passes env.max_depth, or when
    the host stack runs out first (only possible past the host frame cap).
    """
    if env is None:
        env = Environment.standard()

    if env.depth:
        return evaluate0(expr, env)
    # Outermost call: size the host stack and translate its overflow.
    with recursion_budget(env.max_depth):
        try:
            return evaluate0(expr, env)
        except RecursionError as ex:
            raise RecursionDepthExceeded(
                env.max_depth, "Host recursion limit reached before max_depth"
            ) from ex


def evaluate0(expr: SExpr, env: Environment) -> SExpr:
    """Single evaluation step with depth accounting."""
    if not isinstance(expr, List):
        return expr

    if env.depth >= env.max_depth:
        raise RecursionDepthExceeded(env.max_depth)
    env.depth += 1
    try:
        return _evaluate_list(expr, env)
    finally:
        env.depth -= 1


def _evaluate_list(expr: List, env: Environment) -> SExpr:
    elements = expr.elements
    if not elements:
        return expr

    head = elements[0]
    if isinstance(head, Atom) and head.text in special_form_names():
        form = expr
    else:
        # Applicative order: only sub-lists are reduced, atoms pass through
        reduced = []
        for e in elements:
            reduced.append(evaluate0(e, env) if isinstance(e, List) else e)
        form = List(reduced)
        head = reduced[0]

    match head:
        case Atom(text=name):
            op = env.lookup(name)
            if isinstance(op, Closure):
                return apply_closure(op, form, env, evaluate)
            if op is not None:
                return op(env, form)
            if env.strict:
                raise UnknownOperator(name)
        case Closure():
            return apply_closure(head, form, env, evaluate)

    return form
