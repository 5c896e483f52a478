import logging

from image_editor.utils.logging import LOGGER_NAME, get_logger, logger


def test_single_package_logger():
    assert get_logger() is logger
    assert logger is logging.getLogger(LOGGER_NAME)
    assert logger.level == logging.INFO


def test_repeated_calls_do_not_stack_handlers():
    handlers = list(logger.handlers)
    get_logger()
    get_logger()
    assert logger.handlers == handlers
    assert len(handlers) == 1
