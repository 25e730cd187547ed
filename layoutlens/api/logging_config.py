import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from layoutlens.config import config


def setup_logging():
    logger = logging.getLogger("layoutlens")
    logger.setLevel(getattr(logging, str(config.get("logging", "level", "INFO")).upper(), logging.INFO))

    # Handlers already attached, don't add duplicates
    if logger.handlers:
        return logger

    formatter = logging.Formatter(config.get("logging", "format"))

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Rotating file handler, only when a log file is configured
    log_file = config.get("logging", "file")
    if log_file:
        log_dir = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=config.get("logging", "max_bytes"),
            backupCount=config.get("logging", "backup_count"),
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


# Shared application logger
logger = setup_logging()
