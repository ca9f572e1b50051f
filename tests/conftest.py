import signal

import pytest

from Keypad.InputController import InputController


@pytest.fixture
def calc():
    return InputController(precision=10)


class FakeEngine:
    """Stand-in evaluator that fails with a plain Python exception."""

    def __init__(self, exception):
        self.exception = exception
        self.calls = []

    def to_expression(self, value):
        return str(value)

    def evaluate(self, problem):
        self.calls.append(problem)
        raise self.exception

    def format(self, value, precision=None):
        return str(value)

    def is_scalar(self, value):
        return True

    def to_number(self, value):
        return value


@pytest.fixture
def crashing_engine():
    return FakeEngine(RuntimeError("boom"))


class EvaluationTimeout(BaseException):
    """Not an Exception, so no except-branch in the calculator can swallow it."""


@pytest.fixture
def time_limit():
    """Fail the test if it is still running after 10 seconds."""
    if not hasattr(signal, "SIGALRM"):
        pytest.skip("needs SIGALRM")

    def expire(signum, frame):
        raise EvaluationTimeout("evaluation did not return in time")

    previous = signal.signal(signal.SIGALRM, expire)
    signal.alarm(10)
    yield
    signal.alarm(0)
    signal.signal(signal.SIGALRM, previous)
