import logging
import sys
from typing import Any

from loguru import logger

from eventshare.config import get_settings

# Stdlib loggers of the server stack routed through loguru
INTERCEPTED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi")

# Event names are logged with bound context, so both formats show {extra}
DEBUG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level> | {extra}"
)
PLAIN_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name} | {message} | {extra}"


class InterceptHandler(logging.Handler):
    """Intercept stdlib logging and redirect to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk back to the frame that called the stdlib logger
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _health_check_filter(record: dict[str, Any]) -> bool:
    """Drop load balancer health check access lines."""
    return '"GET /health ' not in record["message"]


def setup_logging(debug: bool | None = None) -> None:
    """
    Configure loguru for the API server and CLI.

    Args:
        debug: Force DEBUG output (defaults to the DEBUG setting)
    """
    if debug is None:
        debug = get_settings().debug

    logger.remove()

    if debug:
        logger.add(
            sys.stderr,
            level="DEBUG",
            format=DEBUG_FORMAT,
            backtrace=True,
            diagnose=True,
        )
    else:
        logger.add(
            sys.stderr,
            level="INFO",
            format=PLAIN_FORMAT,
            filter=_health_check_filter,
            backtrace=True,
            diagnose=False,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in INTERCEPTED_LOGGERS:
        logging.getLogger(name).handlers = [InterceptHandler()]


def get_logger(name: str) -> Any:
    """Get a loguru logger bound to a module name."""
    return logger.bind(name=name)
