from mclisp.evaluation.evaluator import evaluate
from mclisp.types.environment import Environment
from mclisp.types.sexpr import List, NIL, SExpr, is_nil


def cond_form(env: Environment, form: List) -> SExpr:
    """
    (cond (p1 r1) (p2 r2) ...)
    Predicates are evaluated in order; the first one that is not the empty
    list selects its result, which is then evaluated. Later clauses are left
    untouched. A clause that is not a two-element list ends the search with NIL.
    """
    if len(form) < 2:
        return NIL

    for clause in form.elements[1:]:
        if not isinstance(clause, List) or len(clause) != 2:
            return NIL
        predicate, result = clause.elements
        if not is_nil(evaluate(predicate, env)):
            return evaluate(result, env)
    return NIL
