from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Iterable, TextIO

from .capture import SafelyResult, possibly, safely
from .common.config_service import ConfigService
from .delay import (
    DotEvery,
    FixedDelay,
    MinimumInterval,
    delay_at_least,
    delay_by,
    dot_every,
)
from .observers import Reporter, log_calls, track_dir
from .vectorizing import vectorize


class FunctionOperators:
    """Apply operators with defaults taken from the working directory's settings."""

    def __init__(self, base_path: Path | None = None):
        self.config = ConfigService(base_path)

    @property
    def base_path(self) -> Path:
        return self.config.base_path

    def set_working_path(self, base_path: Path) -> Path:
        return self.config.set_working_path(base_path)

    def possibly(
        self, func: Any, otherwise: Any = None, *, quiet: bool | None = None, **kwargs
    ) -> Callable[..., Any]:
        quiet = self.config.settings["quiet"] if quiet is None else quiet
        return possibly(func, otherwise, quiet=quiet, **kwargs)

    def safely(
        self, func: Any, otherwise: Any = None, *, quiet: bool | None = None, **kwargs
    ) -> Callable[..., SafelyResult]:
        quiet = self.config.settings["quiet"] if quiet is None else quiet
        return safely(func, otherwise, quiet=quiet, **kwargs)

    def vectorize(
        self,
        func: Any,
        vectorize_args: Iterable[str] | None = None,
        *,
        simplify: bool | None = None,
    ) -> Callable[..., Any]:
        simplify = self.config.settings["simplify"] if simplify is None else simplify
        return vectorize(func, vectorize_args, simplify=simplify)

    def delay_by(
        self, func: Any, amount: float | None = None, **kwargs
    ) -> FixedDelay:
        amount = self.config.settings["delay"] if amount is None else amount
        return delay_by(func, amount, **kwargs)

    def delay_at_least(
        self, func: Any, interval: float | None = None, **kwargs
    ) -> MinimumInterval:
        interval = self.config.settings["min_interval"] if interval is None else interval
        return delay_at_least(func, interval, **kwargs)

    def dot_every(
        self, func: Any, n: int | None = None, *, stream: TextIO | None = None
    ) -> DotEvery:
        n = self.config.settings["dot_every"] if n is None else n
        return dot_every(func, n, stream=stream)

    def log_calls(self, func: Any, log_file: Path | str | None = None, **kwargs):
        if log_file is None:
            target = self.config.log_path
        else:
            target = Path(log_file)
            if not target.is_absolute():
                target = self.base_path / target
        return log_calls(func, target, **kwargs)

    def track_dir(
        self,
        func: Any,
        path: Path | str | None = None,
        *,
        reporter: Reporter | None = None,
    ) -> Callable[..., Any]:
        settings = self.config.settings
        return track_dir(
            func,
            path if path is not None else self.base_path,
            include_hidden=settings["include_hidden"],
            recursive=settings["recursive"],
            reporter=reporter,
        )
