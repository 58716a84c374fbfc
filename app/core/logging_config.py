import os
import sys

from loguru import logger

from app.core.config import Settings

LOG_FORMAT = "{time} | {level} | {message}"


def configure_logging(settings: Settings):
    """Install the stderr sink and the rotating file sinks."""
    logger.remove()

    logger.add(sys.stderr, level=settings.log_level, format=LOG_FORMAT)

    if not settings.log_dir:
        return logger

    # Create folder if missing
    if not os.path.exists(settings.log_dir):
        os.makedirs(settings.log_dir)

    # General application log
    logger.add(
        f"{settings.log_dir}/app.log",
        rotation="1 week",
        retention="4 weeks",
        level=settings.log_level,
        enqueue=True,
        format=LOG_FORMAT
    )

    # Login / registration / password activity
    logger.add(
        f"{settings.log_dir}/auth.log",
        rotation="1 week",
        retention="4 weeks",
        level="INFO",
        enqueue=True,
        filter=lambda record: record["extra"].get("log_type") == "auth",
        format=LOG_FORMAT
    )

    # Event + image lifecycle activity
    logger.add(
        f"{settings.log_dir}/events.log",
        rotation="1 week",
        retention="4 weeks",
        level="INFO",
        enqueue=True,
        filter=lambda record: record["extra"].get("log_type") == "event",
        format=LOG_FORMAT
    )

    # Error logs
    logger.add(
        f"{settings.log_dir}/errors.log",
        rotation="1 week",
        retention="8 weeks",
        level="ERROR",
        enqueue=True,
    )

    return logger


def get_logger(log_type: str | None = None):
    if log_type:
        return logger.bind(log_type=log_type)
    return logger
