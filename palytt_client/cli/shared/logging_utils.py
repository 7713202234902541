"""Loguru helpers for file logging in CLI commands."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

_SINK_IDS: dict[str, int] = {}

STDERR_FORMAT = "<dim>{time:HH:mm:ss.SSS}</dim> | <level>{level: <8}</level> | <level>{message}</level>"


def get_log_dir() -> Path:
    return Path.home() / ".palytt" / "logs"


def ensure_rotating_log_file(name: str, level: str = "INFO") -> Path:
    """Add a rotating log sink for the given command name (once per process)."""
    log_path = get_log_dir() / f"{name}.log"
    if name in _SINK_IDS:
        return log_path
    log_path.parent.mkdir(parents=True, exist_ok=True)
    sink_id = logger.add(
        str(log_path),
        level=level,
        rotation="10 MB",
        retention="14 days",
        enqueue=True,
        encoding="utf-8",
        backtrace=False,
        diagnose=False,
    )
    _SINK_IDS[name] = sink_id
    return log_path


def configure_cli_logging(command: str, *, logs: bool, debug: bool) -> None:
    """
    Route ``palytt_client`` logs for a CLI command.

    Library logging is off unless ``--logs`` or ``--debug`` is given; debug
    also swaps the default stderr sink for a compact DEBUG one.
    """
    if debug:
        logger.remove()
        logger.add(sys.stderr, level="DEBUG", format=STDERR_FORMAT)
        logger.enable("palytt_client")
        ensure_rotating_log_file(command, level="DEBUG")
    elif logs:
        logger.enable("palytt_client")
        ensure_rotating_log_file(command, level="INFO")
    else:
        logger.disable("palytt_client")
