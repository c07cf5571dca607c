"""Logging configuration."""
import sys
from pathlib import Path

import sentry_sdk
from loguru import logger

from job_tracker.config.settings import settings

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | <level>{message}</level>"
)


def _sentry_sink(message) -> None:
    record = message.record
    if record["exception"]:
        sentry_sdk.capture_exception(record["exception"].value)
        return
    with sentry_sdk.new_scope() as scope:
        scope.set_extra("name", record["name"])
        scope.set_extra("line", record["line"])
        sentry_sdk.capture_message(record["message"], level="error", scope=scope)


def setup_logger(log_level: str = "INFO", logs_dir: Path | None = None) -> None:
    """Console sink always; a rotating file sink when logs_dir is given;
    ERROR and above forwarded to Sentry when a DSN is configured."""
    logger.remove()
    logger.add(sys.stderr, format=_CONSOLE_FORMAT, level=log_level, colorize=True)

    if logs_dir is not None:
        logs_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            logs_dir / "job_tracker.log",
            level=log_level,
            rotation="10 MB",
            retention=5,
        )

    if settings.sentry_dsn:
        sentry_sdk.init(dsn=settings.sentry_dsn, environment=settings.sentry_environment)
        logger.add(_sentry_sink, level="ERROR")

    logger.debug(f"Logger initialized at {log_level}")
