import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from salon.config import settings

CONSOLE_FORMAT = '%(levelname)s - %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(log_dir: Optional[str] = None, name: str = "salon") -> logging.Logger:
    """
    Console output plus a rotating salon log file. Modules log through child
    loggers ("salon.services.ledger", ...) and inherit both handlers.
    Calling it again returns the already configured logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    if logger.handlers:
        return logger

    log_dir = log_dir or settings.log_dir
    os.makedirs(log_dir, exist_ok=True)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG if settings.debug else logging.INFO)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    # Customer names are Korean
    file_handler = RotatingFileHandler(
        os.path.join(log_dir, settings.log_file),
        maxBytes=settings.log_max_bytes,
        backupCount=settings.log_backup_count,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))

    logger.addHandler(console_handler)
    logger.addHandler(file_handler)

    return logger
