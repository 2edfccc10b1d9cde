"""Loguru logging configuration.

Human-readable output goes to stderr. Records bound with ``json_output=True``
are additionally emitted as serialized JSON, which is what log shippers on
the hosting side pick up. A rotating file sink is added when ``log_dir`` is
set.
"""

import sys
from pathlib import Path

from loguru import logger

_LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {extra[cache_status]:<4} | "
    "{name}:{function}:{line} | {message}"
)
_LOG_FILE_NAME = "geocode-cache.log"


def setup_logging(log_level: str = "INFO", log_dir: str | None = None) -> None:
    """Configure Loguru sinks.

    Safe to call more than once; existing sinks are replaced.

    Args:
        log_level: Minimum log level to emit (case-insensitive).
        log_dir: Optional directory for log files.  When set, a rotating
            file sink is added (rotated every 24 hours, retained 7 days).
    """
    level = log_level.upper()

    logger.remove()
    logger.configure(extra={"cache_status": "-"})
    logger.add(sys.stderr, level=level, format=_LOG_FORMAT, serialize=False)
    logger.add(
        sys.stderr,
        level=level,
        serialize=True,
        filter=lambda record: record["extra"].get("json_output", False),
    )

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / _LOG_FILE_NAME,
            level=level,
            format=_LOG_FORMAT,
            rotation="24h",
            retention="7 days",
        )
