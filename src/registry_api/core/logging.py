"""Loguru structured logging configuration.

Human-readable stderr output plus a JSON sink for records bound with
``json_output=True``. Optionally writes to a rotating log file when a
``log_dir`` is provided.
"""

import sys
from pathlib import Path

from loguru import logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"
_LOG_FILE_NAME = "registry-api.log"


def setup_logging(log_level: str = "INFO", log_dir: str | None = None) -> None:
    """Configure Loguru for human-readable and structured JSON logging.

    Args:
        log_level: Minimum log level to emit.
        log_dir: Optional directory for log files.  When set, a rotating
            file sink is added (rotated every 24 hours, retained 7 days).
    """
    level = log_level.upper()
    logger.remove()
    logger.configure(extra={"service": "registry-api"})

    # Tracebacks must not render local variables; they hold resident records
    logger.add(
        sys.stderr,
        level=level,
        format=_LOG_FORMAT,
        serialize=False,
        diagnose=False,
    )
    logger.add(
        sys.stderr,
        level=level,
        serialize=True,
        diagnose=False,
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
            diagnose=False,
        )
