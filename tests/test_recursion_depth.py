import sys

import pytest

from mclisp import host_stack
from mclisp.errors import RecursionDepthExceeded
from mclisp.evaluation.evaluator import evaluate
from mclisp.interpreter import Interpreter
from mclisp.types.environment import Environment
from mclisp.types.sexpr import Atom, List, TRUE

LAST = "(defun last (x) (cond ((equal (cdr x) (quote ())) (car x)) (true (last (cdr x)))))"


def test_non_terminating_function_hits_depth_limit():
    interp = Interpreter(max_depth=50, strict=False)
    interp.eval("(defun loop (x) (loop x))")
    with pytest.raises(RecursionDepthExceeded) as exc:
        interp.eval("(loop a)")
    assert exc.value.limit == 50
    # depth accounting is unwound and the interpreter stays usable
    assert interp.env.depth == 0
    assert interp.eval("(atom a)") == TRUE


def test_configured_limit_fires_before_host_stack():
    interp = Interpreter(max_depth=3000, strict=False)
    interp.eval("(defun loop (x) (loop x))")
    with pytest.raises(RecursionDepthExceeded) as exc:
        interp.eval("(loop a)")
    assert exc.value.limit == 3000
    assert str(exc.value) == "Maximum recursion depth 3000 exceeded"
    assert exc.value.__cause__ is None


def test_deeply_nested_tree_hits_depth_limit():
    env = Environment.standard(max_depth=10, strict=False)
    tree = Atom("a")
    for _ in range(20):
        tree = List([Atom("list"), tree])
    with pytest.raises(RecursionDepthExceeded):
        evaluate(tree, env)
    assert env.depth == 0


def test_nesting_within_limit_evaluates():
    env = Environment.standard(max_depth=30, strict=False)
    tree = List([Atom("quote"), List([Atom("a")])])
    for _ in range(20):
        tree = List([Atom("list"), tree])
    assert evaluate(tree, env) == List([Atom("a")])


def test_reader_uses_environment_limit():
    interp = Interpreter(max_depth=10, strict=False)
    with pytest.raises(RecursionDepthExceeded):
        interp.eval("(car " * 20 + "a" + ")" * 20)


def test_host_stack_overflow_is_reported_as_depth_error():
    interp = Interpreter(max_depth=10 ** 7, strict=False)
    interp.eval("(defun loop (x) (loop x))")
    with pytest.raises(RecursionDepthExceeded) as exc:
        interp.eval("(loop a)")
    assert isinstance(exc.value.__cause__, RecursionError)
    assert interp.env.depth == 0
    assert interp.eval("(atom a)") == TRUE


def test_recursion_over_long_list():
    atoms = " ".join(f"a{i}" for i in range(500))
    interp = Interpreter(max_depth=2000, strict=False)
    interp.eval(LAST)
    assert interp.eval(f"(last (quote ({atoms})))") == Atom("a499")


def test_long_list_runs_out_of_a_small_limit():
    atoms = " ".join(f"a{i}" for i in range(500))
    interp = Interpreter(max_depth=200, strict=False)
    interp.eval(LAST)
    with pytest.raises(RecursionDepthExceeded) as exc:
        interp.eval(f"(last (quote ({atoms})))")
    assert exc.value.limit == 200


def test_host_recursion_limit_is_restored():
    before = sys.getrecursionlimit()
    interp = Interpreter(max_depth=5000, strict=False)
    interp.eval("(defun loop (x) (loop x))")
    with pytest.raises(RecursionDepthExceeded):
        interp.eval("(loop a)")
    assert sys.getrecursionlimit() == before
    interp.eval(LAST)
    assert interp.eval("(last (quote (a b c)))") == Atom("c")
    assert sys.getrecursionlimit() == before


@pytest.mark.parametrize(
    "max_depth, expected",
    [
        (10, 10 * host_stack.FRAMES_PER_LEVEL + host_stack.FRAME_MARGIN),
        (1000, 1000 * host_stack.FRAMES_PER_LEVEL + host_stack.FRAME_MARGIN),
        (10 ** 7, host_stack.MAX_HOST_FRAMES),
    ]
)
def test_frames_needed(max_depth, expected):
    assert host_stack.frames_needed(max_depth) == expected


def test_recursion_budget_never_lowers_the_limit():
    before = sys.getrecursionlimit()
    with host_stack.recursion_budget(1) as limit:
        assert limit == before == sys.getrecursionlimit()
    assert sys.getrecursionlimit() == before


def test_recursion_budget_restores_on_error():
    before = sys.getrecursionlimit()
    needed = host_stack.frames_needed(10 ** 6)
    with pytest.raises(ValueError):
        with host_stack.recursion_budget(10 ** 6) as limit:
            assert sys.getrecursionlimit() == limit == max(needed, before)
            raise ValueError("boom")
    assert sys.getrecursionlimit() == before
