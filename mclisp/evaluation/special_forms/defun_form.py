import logging

from mclisp.evaluation.special_forms.lambda_form import is_param_list
from mclisp.types.environment import Environment
from mclisp.types.sexpr import Atom, Closure, List, NIL, SExpr

logger = logging.getLogger(__name__)


def defun_form(env: Environment, form: List) -> SExpr:
    """
    (defun name (params) body)
    Registers a named Closure in the user table of `env`, shadowing any
    builtin of the same name. Always evaluates to NIL.
    """
    if len(form) != 4:
        return NIL

    _, name, params, body = form.elements
    if not isinstance(name, Atom) or not is_param_list(params):
        return NIL

    if name.text in env.user:
        logger.debug("redefining %s", name.text)
    env.define(name.text, Closure(params.elements, body, name.text, env))
    logger.debug("defined %s with %d parameter(s)", name.text, len(params))
    return NIL
