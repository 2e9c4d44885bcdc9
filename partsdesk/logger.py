# partsdesk/logger.py
import logging
from logging.handlers import RotatingFileHandler
import os
from typing import Optional

PACKAGE_LOGGER = "partsdesk"

_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"

# shared by every module logger through propagation to PACKAGE_LOGGER
_file_handler: Optional[RotatingFileHandler] = None


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger  # handlers are attached once per logger

    logger.setLevel(logging.INFO)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(console_handler)

    return logger


def init_file_logging(log_dir: str) -> RotatingFileHandler:
    """
    Send every partsdesk.* logger to <log_dir>/app.log (10 MB x 5).

    Called by the app factories with app.config['LOG_DIR']. Calling again
    with another directory moves the file output there.
    """
    global _file_handler

    path = os.path.abspath(os.path.join(log_dir, "app.log"))
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    if _file_handler is not None:
        if _file_handler.baseFilename == path:
            return _file_handler
        package_logger.removeHandler(_file_handler)
        _file_handler.close()

    os.makedirs(log_dir, exist_ok=True)
    handler = RotatingFileHandler(
        path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(_FORMAT))

    package_logger.setLevel(logging.INFO)
    package_logger.addHandler(handler)
    _file_handler = handler
    return handler
