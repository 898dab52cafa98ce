import logging

import pytest

from eigenviz.logging_config import LOGGER_NAME, NOISY_LOGGERS, setup_logging


@pytest.fixture
def eigenviz_logger():
    logger = logging.getLogger(LOGGER_NAME)
    saved = (logger.level, list(logger.handlers))
    saved_noisy = {name: logging.getLogger(name).level for name in NOISY_LOGGERS}
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(saved[0])
    logger.handlers[:] = saved[1]
    for name, level in saved_noisy.items():
        logging.getLogger(name).setLevel(level)


def _file_handlers(logger):
    return [h for h in logger.handlers if isinstance(h, logging.FileHandler)]


def test_console_handler(eigenviz_logger):
    assert setup_logging(logging.DEBUG) is eigenviz_logger
    assert eigenviz_logger.level == logging.DEBUG
    assert len(eigenviz_logger.handlers) == 1


def test_repeated_setup_does_not_duplicate(eigenviz_logger):
    setup_logging()
    setup_logging()
    assert len(eigenviz_logger.handlers) == 1


def test_log_file(eigenviz_logger, tmp_path):
    log_file = tmp_path / "eigenviz.log"
    setup_logging(logging.INFO, log_file=str(log_file))
    assert len(eigenviz_logger.handlers) == 2
    logging.getLogger("eigenviz.test").info("hello")
    for handler in eigenviz_logger.handlers:
        handler.flush()
    assert "eigenviz.test - INFO - hello" in log_file.read_text(encoding="utf-8")


def test_rerun_closes_previous_file_handler(eigenviz_logger, tmp_path):
    log_file = str(tmp_path / "eigenviz.log")
    setup_logging(log_file=log_file)
    first = _file_handlers(eigenviz_logger)[0]

    setup_logging(log_file=log_file)

    assert first not in eigenviz_logger.handlers
    assert first.stream is None
    assert len(_file_handlers(eigenviz_logger)) == 1


def test_rerun_appends_to_log_file(eigenviz_logger, tmp_path):
    log_file = tmp_path / "eigenviz.log"
    setup_logging(log_file=str(log_file))
    logging.getLogger("eigenviz.test").info("first run")
    setup_logging(log_file=str(log_file))
    logging.getLogger("eigenviz.test").info("second run")
    for handler in eigenviz_logger.handlers:
        handler.flush()
    text = log_file.read_text(encoding="utf-8")
    assert "first run" in text and "second run" in text


def test_debug_keeps_third_party_quiet(eigenviz_logger):
    setup_logging(logging.DEBUG)
    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.WARNING
