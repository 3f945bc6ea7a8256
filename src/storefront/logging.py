from __future__ import annotations

import logging
import sys

import structlog

SERVICE_NAME = "storefront-api"

ACCESS_LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
ACCESS_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level_number(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


def _timestamp_access_log(level: int) -> None:
    """Give uvicorn's request lines a timestamp; its handlers exist before startup."""

    access_logger = logging.getLogger("uvicorn.access")
    formatter = logging.Formatter(ACCESS_LOG_FORMAT, datefmt=ACCESS_DATE_FORMAT)
    handlers = access_logger.handlers or [logging.StreamHandler(sys.stdout)]
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        if handler not in access_logger.handlers:
            access_logger.addHandler(handler)
    access_logger.setLevel(level)


def setup_logging(level: str | int = "INFO") -> None:
    """Route storefront events through structlog as one JSON object per line."""

    log_level = _level_number(level)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)
    _timestamp_access_log(log_level)

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str):
    # Initial values stay lazy so module-level loggers pick up setup_logging
    return structlog.get_logger(name, service=SERVICE_NAME, component=name)


__all__ = ["SERVICE_NAME", "get_logger", "setup_logging"]
