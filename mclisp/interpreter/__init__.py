from __future__ import annotations

import logging
from typing import Optional

from mclisp.types.sexpr import NIL, SExpr
from mclisp.types.environment import Environment
from mclisp.reader.parser import lex, TokenStream
from mclisp.evaluation.evaluator import evaluate

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Reads and evaluates mclisp source against one Environment.
    Definitions made with defun persist across calls on the same instance;
    separate instances share nothing.
    """

    def __init__(
        self,
        env: Optional[Environment] = None,
        *,
        max_depth: Optional[int] = None,
        strict: Optional[bool] = None,
    ):
        if env is None:
            env = Environment.standard(max_depth=max_depth, strict=strict)
        self.env: Environment = env

    def read(self, code: str) -> list[SExpr]:
        stream = TokenStream(lex(code), self.env.max_depth)
        return stream.read_forms()

    def eval(self, code: str) -> SExpr:
        """Evaluate every top-level form of `code`; return the last result (NIL if none)."""
        result: SExpr = NIL
        for expr in self.read(code):
            logger.debug("eval %s", expr)
            result = evaluate(expr, self.env)
        return result

    def eval_expr(self, expr: SExpr) -> SExpr:
        return evaluate(expr, self.env)

    def defined(self) -> list[str]:
        """Names of the user-defined operations, sorted."""
        return sorted(self.env.user)
