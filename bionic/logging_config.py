"""Console logging setup.

Every record carries the id of the conversion run that emitted it, so output
from concurrent runs can be told apart.
"""

import logging
import logging.config
import sys
from contextvars import ContextVar

run_id_var: ContextVar[str] = ContextVar("run_id", default="-")


class RunIdFilter(logging.Filter):
    """Add the current run id to log records."""

    def filter(self, record):
        record.run_id = run_id_var.get()
        return True


class ColoredConsoleFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record):
        formatted = super().format(record)
        if hasattr(sys.stderr, "isatty") and sys.stderr.isatty():
            formatted = f"{self.COLORS.get(record.levelname, '')}{formatted}{self.RESET}"
        return formatted


def setup_logging(log_level: str = "INFO") -> None:
    """Install a single stderr handler on the root logger. Safe to call repeatedly."""
    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "run_id": {"()": RunIdFilter},
        },
        "formatters": {
            "console": {
                "()": ColoredConsoleFormatter,
                "format": "%(asctime)s | %(levelname)-8s | %(name)-20s | %(run_id)-8s | %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": "console",
                "filters": ["run_id"],
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "pypdf": {"level": "ERROR", "propagate": True},
            "fontTools": {"level": "WARNING", "propagate": True},
        },
        "root": {
            "level": log_level,
            "handlers": ["console"],
        },
    }
    logging.config.dictConfig(config)
