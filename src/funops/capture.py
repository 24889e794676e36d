"""Operators that turn failures and console noise into values.

``possibly`` substitutes a sentinel for a failed call, ``safely`` returns a
:class:`SafelyResult` record and ``quietly`` collects whatever the call wrote
to stdout, stderr or the warnings machinery.

Only ``Exception`` subclasses are captured. ``KeyboardInterrupt``,
``SystemExit`` and ``asyncio.CancelledError`` derive from ``BaseException``
and always reach the caller.
"""

from __future__ import annotations

import functools
import io
import warnings
from contextlib import redirect_stderr, redirect_stdout
from dataclasses import dataclass, field
from typing import Any, Callable

from loguru import logger

from .common.config_service import validate_flag
from .common.invocable import as_invocable, describe


@dataclass(frozen=True)
class SafelyResult:
    result: Any = None
    error: Exception | None = None

    def __post_init__(self) -> None:
        if self.error is not None and not isinstance(self.error, Exception):
            raise TypeError(f"error must be an Exception, got {self.error!r}")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the result, re-raising the captured error if there is one."""
        if self.error is not None:
            raise self.error
        return self.result

    def to_dict(self) -> dict[str, Any]:
        return {"result": self.result, "error": self.error}


@dataclass(frozen=True)
class QuietlyResult:
    result: Any = None
    output: str = ""
    messages: str = ""
    warnings: list[str] = field(default_factory=list)


def _resolve_otherwise(
    otherwise: Any, default_factory: Callable[[], Any] | None
) -> Any:
    if default_factory is None:
        return otherwise
    if otherwise is not None:
        raise ValueError("pass either otherwise or default_factory, not both")
    if not callable(default_factory):
        raise TypeError(f"default_factory must be callable, got {default_factory!r}")
    return default_factory()


def _report(func: Callable[..., Any], exc: Exception) -> None:
    logger.error(
        "Error in {name}: {kind}: {err}",
        name=describe(func),
        kind=type(exc).__name__,
        err=exc,
    )


def possibly(
    func: Any,
    otherwise: Any = None,
    *,
    quiet: bool = True,
    default_factory: Callable[[], Any] | None = None,
) -> Callable[..., Any]:
    """Return a wrapper yielding ``otherwise`` whenever ``func`` raises.

    ``otherwise`` (or the value produced by ``default_factory``) is fixed when
    the wrapper is built. With ``quiet=False`` each captured error is logged
    before the sentinel is returned.
    """
    func = as_invocable(func)
    quiet = validate_flag(quiet, "quiet")
    fallback = _resolve_otherwise(otherwise, default_factory)

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except Exception as exc:
            if not quiet:
                _report(func, exc)
            return fallback

    return wrapper


def safely(
    func: Any,
    otherwise: Any = None,
    *,
    quiet: bool = True,
    default_factory: Callable[[], Any] | None = None,
) -> Callable[..., SafelyResult]:
    """Return a wrapper that always answers with a :class:`SafelyResult`."""
    func = as_invocable(func)
    quiet = validate_flag(quiet, "quiet")
    fallback = _resolve_otherwise(otherwise, default_factory)

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> SafelyResult:
        try:
            value = func(*args, **kwargs)
        except Exception as exc:
            if not quiet:
                _report(func, exc)
            return SafelyResult(result=fallback, error=exc)
        return SafelyResult(result=value, error=None)

    return wrapper


def quietly(func: Any) -> Callable[..., QuietlyResult]:
    func = as_invocable(func)

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> QuietlyResult:
        out, err = io.StringIO(), io.StringIO()
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            with redirect_stdout(out), redirect_stderr(err):
                value = func(*args, **kwargs)
        return QuietlyResult(
            result=value,
            output=out.getvalue(),
            messages=err.getvalue(),
            warnings=[str(w.message) for w in caught],
        )

    return wrapper
