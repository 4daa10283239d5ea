import logging
import sys

from finalpic.logger import get_logger, setup_logger


def test_setup_logger_is_idempotent():
    setup_logger()
    logger = setup_logger(level=logging.DEBUG)
    stderr_handlers = [h for h in logger.handlers if getattr(h, "stream", None) is sys.stderr]
    assert len(stderr_handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False


def test_get_logger_returns_child():
    child = get_logger("export_service")
    assert child.name == "finalpic.export_service"
    assert get_logger().name == "finalpic"
