from __future__ import annotations

from typing import Any, Callable, Protocol


class Invocable(Protocol):
    def __call__(self, *args: Any, **kwargs: Any) -> Any: ...


class ConstantInvocable:
    """Wrap a literal value behind the Invocable interface."""

    def __init__(self, value: Any):
        self._value = value
        self.__name__ = f"constant({value!r})"
        self.__qualname__ = self.__name__

    @property
    def value(self) -> Any:
        return self._value

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._value

    def __repr__(self) -> str:
        return f"ConstantInvocable({self._value!r})"


def as_invocable(func: Any) -> Callable[..., Any]:
    if callable(func):
        return func
    return ConstantInvocable(func)


def describe(func: Any) -> str:
    """Human readable identity for log lines."""
    name = getattr(func, "__qualname__", None) or getattr(func, "__name__", None)
    if name is None:
        return repr(func)
    module = getattr(func, "__module__", None)
    if module and module != "builtins":
        return f"{module}.{name}"
    return name
