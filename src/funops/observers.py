"""Operators that watch a call without changing its outcome.

Both wrappers return whatever the wrapped callable returns and let whatever
it raises propagate untouched; the observation is a pure side effect.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from loguru import logger

from .common.config_service import validate_flag
from .common.invocable import as_invocable, describe

Reporter = Callable[[str], None]


class CallLog:
    """Append-only text log with one ``<label>: <timestamp>`` line per event.

    The file is opened in append mode for every write and closed again, so no
    handle is held between calls.
    """

    def __init__(self, path: Path, now: Callable[[], datetime] | None = None):
        self.path = Path(path)
        self._now = now or datetime.now

    def timestamp(self) -> str:
        return self._now().isoformat(sep=" ", timespec="microseconds")

    def write(self, label: str) -> str:
        line = f"{label}: {self.timestamp()}\n"
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(line)
        return line


def log_calls(
    func: Any,
    log_file: Path | str,
    *,
    now: Callable[[], datetime] | None = None,
) -> Callable[..., Any]:
    func = as_invocable(func)
    log_path = Path(log_file)
    if log_path.is_dir():
        raise ValueError(f"log_file {log_path} is a directory")
    if not log_path.parent.is_dir():
        raise ValueError(f"directory for log_file {log_path} does not exist")

    name = describe(func)
    call_log = CallLog(log_path, now=now)
    call_log.write(f"created {name}")
    logger.debug("Logging calls to {name} in {path}", name=name, path=str(log_path))

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        call_log.write(f"called {name}")
        return func(*args, **kwargs)

    return wrapper


@dataclass(frozen=True)
class DirectorySnapshot:
    names: frozenset[str]

    @classmethod
    def capture(
        cls, path: Path, include_hidden: bool = False, recursive: bool = False
    ) -> "DirectorySnapshot":
        root = Path(path)
        if recursive:
            entries = (p.relative_to(root) for p in root.rglob("*"))
            names = {
                entry.as_posix()
                for entry in entries
                if include_hidden
                or not any(part.startswith(".") for part in entry.parts)
            }
        else:
            names = {
                entry.name
                for entry in root.iterdir()
                if include_hidden or not entry.name.startswith(".")
            }
        return cls(frozenset(names))

    def diff(self, after: "DirectorySnapshot") -> tuple[list[str], list[str]]:
        added = sorted(after.names - self.names)
        removed = sorted(self.names - after.names)
        return added, removed


def format_changes(added: list[str], removed: list[str]) -> str:
    lines = [f"File added: {name}" for name in added]
    lines.extend(f"File removed: {name}" for name in removed)
    return "\n".join(lines)


def _log_report(message: str) -> None:
    logger.info(message)


def track_dir(
    func: Any,
    path: Path | str | None = None,
    *,
    include_hidden: bool = False,
    recursive: bool = False,
    reporter: Reporter | None = None,
) -> Callable[..., Any]:
    """Report files added to or removed from ``path`` by each call.

    ``path`` defaults to the working directory at call time. Nothing is
    reported when a call leaves the directory listing unchanged.
    """
    func = as_invocable(func)
    include_hidden = validate_flag(include_hidden, "include_hidden")
    recursive = validate_flag(recursive, "recursive")
    watched = Path(path) if path is not None else None
    if watched is not None and not watched.is_dir():
        raise ValueError(f"{watched} is not a directory")
    report = reporter or _log_report

    def snapshot(target: Path) -> DirectorySnapshot:
        return DirectorySnapshot.capture(
            target, include_hidden=include_hidden, recursive=recursive
        )

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        target = watched if watched is not None else Path.cwd()
        before = snapshot(target)
        try:
            return func(*args, **kwargs)
        finally:
            try:
                after = snapshot(target)
            except OSError as exc:
                logger.warning(
                    "Could not list {path} after calling {name}: {err}",
                    path=str(target),
                    name=describe(func),
                    err=exc,
                )
            else:
                added, removed = before.diff(after)
                if added or removed:
                    report(format_changes(added, removed))

    return wrapper
