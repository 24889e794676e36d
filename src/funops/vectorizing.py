from __future__ import annotations

import functools
import inspect
import warnings
from collections.abc import Mapping, Sequence, Set
from typing import Any, Callable, Iterable

import pandas as pd
from loguru import logger
from pandas.api.types import is_list_like, is_scalar

from .common.config_service import validate_flag
from .common.invocable import as_invocable, describe

_EXPANDABLE_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.KEYWORD_ONLY,
)


def _is_expandable(value: Any) -> bool:
    # frames travel whole, like mappings
    if isinstance(value, (Mapping, Set, pd.DataFrame)):
        return False
    return is_list_like(value)


def _materialize(value: Any) -> Sequence[Any]:
    if isinstance(value, Sequence):
        return value
    return list(value)


def _recycle(value: Sequence[Any], index: int) -> Any:
    return value[index % len(value)]


def _resolve_names(
    signature: inspect.Signature, vectorize_args: Iterable[str] | None
) -> tuple[str, ...]:
    candidates = [
        name
        for name, param in signature.parameters.items()
        if param.kind in _EXPANDABLE_KINDS
    ]
    if vectorize_args is None:
        return tuple(candidates)

    if isinstance(vectorize_args, str):
        vectorize_args = [vectorize_args]
    names = tuple(vectorize_args)
    unknown = [name for name in names if name not in candidates]
    if unknown:
        raise ValueError(
            f"cannot vectorize over {', '.join(unknown)}: "
            f"not named parameters of the wrapped callable"
        )
    return names


def simplify_results(results: list[Any]) -> list[Any] | pd.DataFrame:
    """Collapse per-element results into a DataFrame when they line up.

    Mappings sharing the same keys become columns; list-likes of a common
    length become positional columns. Anything else stays a list.
    """
    if not results or all(is_scalar(r) for r in results):
        return results

    if all(isinstance(r, Mapping) for r in results):
        keys = list(results[0].keys())
        if all(list(r.keys()) == keys for r in results[1:]):
            return pd.DataFrame.from_records(results, columns=keys)
        return results

    if all(_is_expandable(r) and hasattr(r, "__len__") for r in results):
        lengths = {len(r) for r in results}
        if len(lengths) == 1:
            return pd.DataFrame([list(r) for r in results])

    return results


def vectorize(
    func: Any,
    vectorize_args: Iterable[str] | None = None,
    *,
    simplify: bool = True,
) -> Callable[..., list[Any] | pd.DataFrame]:
    """Apply ``func`` element-wise over its list-like arguments.

    Every call binds its arguments to ``func``'s signature, so keyword
    arguments land on the right parameter no matter the order. Parameters
    named in ``vectorize_args`` (all named parameters by default) are
    expanded when they hold list-likes, recycling shorter ones; the rest are
    passed through to every call unchanged.
    """
    func = as_invocable(func)
    simplify = validate_flag(simplify, "simplify")
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"cannot inspect signature of {describe(func)}") from exc

    names = _resolve_names(signature, vectorize_args)
    logger.debug(
        "Vectorizing {name} over {args}", name=describe(func), args=list(names)
    )

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> list[Any] | pd.DataFrame:
        bound = signature.bind(*args, **kwargs)
        expanded = {
            name: _materialize(bound.arguments[name])
            for name in names
            if name in bound.arguments and _is_expandable(bound.arguments[name])
        }

        if not expanded:
            results = [func(*bound.args, **bound.kwargs)]
            return simplify_results(results) if simplify else results

        lengths = {name: len(value) for name, value in expanded.items()}
        longest = max(lengths.values())
        if min(lengths.values()) == 0:
            return []

        uneven = [name for name, size in lengths.items() if longest % size]
        if uneven:
            warnings.warn(
                f"longer argument not a multiple of length of {', '.join(uneven)}",
                UserWarning,
                stacklevel=2,
            )

        results = []
        for index in range(longest):
            call = signature.bind_partial()
            call.arguments.update(bound.arguments)
            for name, value in expanded.items():
                call.arguments[name] = _recycle(value, index)
            results.append(func(*call.args, **call.kwargs))

        return simplify_results(results) if simplify else results

    return wrapper
