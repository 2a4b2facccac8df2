"""Registry of special forms for the mclisp evaluator.

Maps operator names to handlers that decide for themselves which operands
to evaluate. The evaluator skips argument pre-evaluation for exactly these
names (see mclisp.evaluation.evaluator.special_form_names).
"""

from mclisp.evaluation.special_forms.quote_form import quote_form
from mclisp.evaluation.special_forms.cond_form import cond_form
from mclisp.evaluation.special_forms.lambda_form import lambda_form
from mclisp.evaluation.special_forms.defun_form import defun_form

SPECIAL_FORMS = {
    "quote": quote_form,
    "cond": cond_form,
    "lambda": lambda_form,
    "defun": defun_form,
}
