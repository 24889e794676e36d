from functools import partial

import pytest

from funops.capture import SafelyResult, possibly, safely
from funops.chaining import chain
from funops.delay import delay_by


def test_operators_apply_left_to_right():
    order: list[str] = []

    def tag(label):
        def operator(func):
            def wrapper(*args, **kwargs):
                order.append(label)
                return func(*args, **kwargs)

            return wrapper

        return operator

    wrapped = chain(lambda: "done", tag("inner"), tag("outer"))
    assert wrapped() == "done"
    assert order == ["outer", "inner"]


def test_chain_with_configured_operators():
    sleeps: list[float] = []

    def flaky(x):
        if x < 0:
            raise ValueError("negative")
        return x

    wrapped = chain(
        flaky,
        partial(delay_by, amount=0.2, sleeper=sleeps.append),
        partial(safely, otherwise=-1),
    )

    assert wrapped(3) == SafelyResult(result=3, error=None)
    failed = wrapped(-3)
    assert failed.result == -1
    assert isinstance(failed.error, ValueError)
    assert sleeps == [0.2, 0.2]


def test_chain_without_operators_returns_callable():
    assert chain(len)([1, 2]) == 2
    assert chain(5)() == 5


def test_chain_rejects_non_callable_operator():
    with pytest.raises(TypeError):
        chain(len, possibly, "not an operator")
