import pytest

from mclisp.types.environment import Environment
from mclisp.interpreter import Interpreter

# Fixtures pin max_depth/strict explicitly so MCLISP_* variables in the
# caller's shell cannot change test outcomes.


@pytest.fixture
def env():
    """Return a fresh standard environment for each test."""
    return Environment.standard(max_depth=200, strict=False)


@pytest.fixture
def interp(env):
    return Interpreter(env)


@pytest.fixture
def run(interp):
    """Evaluate source text in the test's interpreter."""
    return interp.eval
