import logging
import logging.handlers
import os

import pytest

from kakeibo.core.config import settings
from kakeibo.core.logging_config import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def test_setup_logging_writes_to_named_file(restore_root_logger):
    setup_logging("recurring-test.log", level="debug")

    file_handlers = [
        h for h in restore_root_logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    assert [h.baseFilename for h in file_handlers] == [
        os.path.abspath(os.path.join(settings.LOG_DIR, "recurring-test.log"))
    ]
    assert restore_root_logger.level == logging.DEBUG
    assert logging.getLogger("kakeibo").level == logging.DEBUG
