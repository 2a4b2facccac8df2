"""Closure application for mclisp.

Both defun-registered functions and lambda values are Closures; applying
one drops the operator slot of the call form, substitutes the arguments
for the parameters in the body, and evaluates the result.
"""

from __future__ import annotations

import logging

from mclisp.types.environment import Environment
from mclisp.types.sexpr import Closure, List, NIL, SExpr
from mclisp.evaluation.substitute import substitute

logger = logging.getLogger(__name__)


def apply_closure(fn: Closure, form: List, env: Environment, evaluate_fn) -> SExpr:
    """Apply `fn` to the arguments in `form` (operator slot included).

    `evaluate_fn` evaluates the substituted body. An argument count
    different from the parameter count yields NIL.
    """
    args = form.elements[1:]
    if len(args) != len(fn.params):
        logger.debug(
            "arity mismatch calling %s: expected %d argument(s), got %d",
            fn.name or "lambda", len(fn.params), len(args),
        )
        return NIL

    body = substitute(fn.body, fn.params, args)
    return evaluate_fn(body, fn.env if fn.env is not None else env)
