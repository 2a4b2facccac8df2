# mclisp: a minimal LISP after McCarthy's micro-manual.
#
# Public entry points:
# - read / read_all: source text -> S-expression tree(s)
# - evaluate:        tree + Environment -> tree
# - to_string:       display rendering of a tree
# - Interpreter:     source text in, definitions kept between calls
#
# Trees are Atom / List / Closure values from mclisp.types.sexpr and compare
# structurally with ==.

from mclisp.errors import (
    McLispError,
    McLispSyntaxError,
    UnbalancedParentheses,
    MalformedTopLevel,
    RecursionDepthExceeded,
    UnknownOperator,
)
from mclisp.types.sexpr import Atom, List, Closure, SExpr, NIL, TRUE, to_string
from mclisp.types.environment import Environment
from mclisp.reader.parser import read, read_all
from mclisp.evaluation.evaluator import evaluate
from mclisp.interpreter import Interpreter

__all__ = [
    "Atom", "List", "Closure", "SExpr", "NIL", "TRUE",
    "Environment", "Interpreter",
    "read", "read_all", "evaluate", "to_string",
    "McLispError", "McLispSyntaxError", "UnbalancedParentheses",
    "MalformedTopLevel", "RecursionDepthExceeded", "UnknownOperator",
]
