from mclisp.types.environment import Environment
from mclisp.types.sexpr import List, NIL, SExpr


def quote_form(env: Environment, form: List) -> SExpr:
    """(quote x) -> x, unevaluated."""
    if len(form) != 2:
        return NIL
    return form[1]
