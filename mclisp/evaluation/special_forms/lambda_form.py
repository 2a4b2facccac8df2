from mclisp.types.environment import Environment
from mclisp.types.sexpr import Atom, Closure, List, NIL, SExpr


def is_param_list(params: SExpr) -> bool:
    return isinstance(params, List) and all(isinstance(p, Atom) for p in params)


def lambda_form(env: Environment, form: List) -> SExpr:
    """
    (lambda (params) body)
    Returns an anonymous Closure value. Nothing is registered in the
    environment, so the same closure can be applied any number of times.
    """
    if len(form) != 3:
        return NIL

    _, params, body = form.elements
    if not is_param_list(params):
        return NIL
    return Closure(params.elements, body, None, env)
