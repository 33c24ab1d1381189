"""Logging setup: one stdout handler with ISO timestamps."""

import logging
import sys

_NOISY_LOGGERS = ("httpx", "httpcore", "openai", "psycopg", "psycopg.pool")


def configure_logging(level: str | int = logging.INFO) -> None:
    """Replace root handlers with a single stdout handler at the given level."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    root_logger.setLevel(level.upper() if isinstance(level, str) else level)
    root_logger.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
