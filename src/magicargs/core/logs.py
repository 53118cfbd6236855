"""Structured run log for magic actions.

Every record is a JSON line appended to the workflow's log file, which is
also what the ``log`` magic action opens.
"""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from typing import TextIO

import structlog

log = structlog.get_logger()

_started = time.monotonic()
_log_stream: TextIO | None = None


def configure_logging(log_path: Path) -> None:
    """Configure structlog to append JSON lines to log_path. Call once at startup."""
    global _log_stream, _started
    _started = time.monotonic()

    log_path.parent.mkdir(parents=True, exist_ok=True)
    if _log_stream is not None:
        _log_stream.close()
    _log_stream = open(log_path, "a", encoding="utf-8")

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", key="ts"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
        logger_factory=structlog.WriteLoggerFactory(file=_log_stream),
    )


def ensure_logging() -> None:
    """Send records to stderr unless logging was configured elsewhere.

    stdout belongs to the Script Filter feedback, and structlog's unconfigured
    default prints there.
    """
    if structlog.is_configured():
        return
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", key="ts"),
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        logger_factory=structlog.WriteLoggerFactory(file=sys.stderr),
    )


def finish_log(failed: bool) -> None:
    """Write the closing record of a run, marking whether it failed."""
    elapsed = round(time.monotonic() - _started, 3)
    if failed:
        log.error("run_finished", failed=True, elapsed=elapsed)
    else:
        log.info("run_finished", failed=False, elapsed=elapsed)
