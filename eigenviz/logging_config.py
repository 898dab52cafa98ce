"""
Logging for the eigenviz package.

Every page calls `setup_logging()` at the top of its run. Streamlit
re-executes the whole script on each interaction, so the handlers a
previous run attached are closed and replaced rather than stacked.
"""
import logging
import sys
from typing import Optional

LOGGER_NAME = "eigenviz"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%H:%M:%S"

# Third-party loggers that flood the console once the app runs at DEBUG
NOISY_LOGGERS = ("matplotlib", "PIL")


def _reset_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach a stdout handler (and optionally a file handler) to the
    'eigenviz' logger and return it.

    Args:
        level: level for the package logger and its handlers.
        log_file: optional path; lines are appended so reruns keep history.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    _reset_handlers(logger)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger.debug("Logging configured at %s", logging.getLevelName(level))
    return logger
