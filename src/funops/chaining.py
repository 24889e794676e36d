from __future__ import annotations

from functools import reduce
from typing import Any, Callable

from .common.invocable import as_invocable

Operator = Callable[[Callable[..., Any]], Callable[..., Any]]


def chain(func: Any, *operators: Operator) -> Callable[..., Any]:
    """Apply ``operators`` to ``func`` left to right.

    ``chain(f, a, b)`` is ``b(a(f))``, so the last operator ends up outermost.
    Bind operator settings with ``functools.partial`` first:

    >>> slow_and_safe = chain(fetch, partial(delay_by, amount=0.1), safely)
    """
    for operator in operators:
        if not callable(operator):
            raise TypeError(f"operators must be callable, got {operator!r}")

    def apply_(wrapped: Callable[..., Any], operator: Operator) -> Callable[..., Any]:
        return operator(wrapped)

    return reduce(apply_, operators, as_invocable(func))
