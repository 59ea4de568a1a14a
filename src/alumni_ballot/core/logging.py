"""Loguru logging configuration for the CLI.

Console output goes to stderr so it never mixes with command output on
stdout. It is either a one-line text format or, with ``json_logs``, one
serialized JSON record per line for log shippers.
"""

import sys
from pathlib import Path

from loguru import logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"
_LOG_FILE = "alumni-ballot.log"


def setup_logging(log_level: str = "INFO", log_dir: str | None = None, json_logs: bool = False) -> None:
    """Replace any existing Loguru sinks with the CLI's sinks.

    Args:
        log_level: Minimum log level to emit (case-insensitive).
        log_dir: Optional directory for a log file rotated every 24 hours
            and kept for 7 days.
        json_logs: Emit stderr records as JSON lines instead of text.
    """
    level = log_level.upper()
    logger.remove()
    if json_logs:
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(sys.stderr, level=level, format=_LOG_FORMAT)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(log_path / _LOG_FILE, level=level, format=_LOG_FORMAT, rotation="24h", retention="7 days")
