import json
import logging
import os
import sys
from logging import Logger
from typing import List, Optional

LOGGER_NAMESPACE = "secretsharing"

# Record attributes copied into JSON output when callers pass them via ``extra``.
CONTEXT_FIELDS = ("n", "k", "x", "prime_bit_length", "state", "attempts")


class JsonFormatter(logging.Formatter):
    """Structured JSON formatter for log records."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%SZ"),
        }
        for field_name in CONTEXT_FIELDS:
            if hasattr(record, field_name):
                log[field_name] = getattr(record, field_name)
        if record.exc_info:
            log["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log, default=str)


def configure_logging(level: Optional[str] = None, json_output: bool = False, log_file: Optional[str] = None) -> Logger:
    """
    Configure the package logger. Uses stdout by default; can additionally tee to a file.

    Only the ``secretsharing`` logger tree is touched, so embedding
    applications keep control of the root logger.
    """
    env_level = os.getenv("LOG_LEVEL")
    effective_level = level or env_level or "WARNING"
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    formatter: logging.Formatter
    if json_output:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    logger = logging.getLogger(LOGGER_NAMESPACE)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, effective_level.upper(), logging.WARNING))
    logger.propagate = False
    return logger


def get_logger(name: str) -> Logger:
    """Return a logger nested under the package namespace."""
    if name == LOGGER_NAMESPACE or name.startswith(LOGGER_NAMESPACE + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


# Library default: stay silent unless the application configures handlers.
logging.getLogger(LOGGER_NAMESPACE).addHandler(logging.NullHandler())
