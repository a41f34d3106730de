"""Application logging helpers."""

import logging as py_logging
import sys
from pathlib import Path

LOG_LEVELS = {
    "DEBUG": py_logging.DEBUG,
    "INFO": py_logging.INFO,
    "WARN": py_logging.WARNING,
    "WARNING": py_logging.WARNING,
    "ERROR": py_logging.ERROR,
}
_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"


def configure_logging(level="WARN", stream=None, log_file=None):
    """Set up the ``svte`` logger and return it.

    Messages go to *stream* (stderr by default). When *log_file* is given,
    everything from DEBUG up is also written there; a file that cannot be
    opened is skipped rather than failing startup.
    """
    resolved = LOG_LEVELS.get(level.upper(), py_logging.WARNING)

    logger = py_logging.getLogger("svte")
    logger.setLevel(min(resolved, py_logging.DEBUG) if log_file else resolved)
    logger.handlers.clear()
    formatter = py_logging.Formatter(_FORMAT)

    handler = py_logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = py_logging.FileHandler(log_path, encoding="utf-8")
        except OSError:
            logger.warning("Cannot open log file %s", log_path)
        else:
            file_handler.setLevel(py_logging.DEBUG)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    logger.propagate = False
    return logger
