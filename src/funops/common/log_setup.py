from __future__ import annotations

import os
import sys
from contextlib import suppress
from pathlib import Path
from typing import Optional

from loguru import logger

_STDERR_SINK_ID: int | None = None
_FILE_SINK_ID: int | None = None


def configure_logging(
    level: Optional[str] = None, log_file: Optional[Path] = None
) -> str:
    """Route loguru output to stderr and, optionally, a rotating file.

    The level falls back to the FUNOPS_LOG_LEVEL environment variable and then
    to INFO. Calling this again replaces the sinks added by the previous call.
    """
    global _STDERR_SINK_ID, _FILE_SINK_ID  # pylint: disable=global-statement

    resolved_level = (level or os.getenv("FUNOPS_LOG_LEVEL", "INFO")).upper()

    if _STDERR_SINK_ID is None:
        # drop loguru's default stderr sink the first time through
        logger.remove()
    else:
        # someone may have cleared every sink since our last call
        with suppress(ValueError):
            logger.remove(_STDERR_SINK_ID)
    _STDERR_SINK_ID = logger.add(sys.stderr, level=resolved_level)

    if _FILE_SINK_ID is not None:
        with suppress(ValueError):
            logger.remove(_FILE_SINK_ID)
        _FILE_SINK_ID = None

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _FILE_SINK_ID = logger.add(
            log_file,
            level="DEBUG",
            rotation="10 MB",
            retention=5,
            backtrace=False,
            diagnose=False,
        )
        logger.debug("File logging enabled at {path}", path=str(log_file))

    return resolved_level
