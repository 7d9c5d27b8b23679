"""
src/logging_setup.py
────────────────────
Application logging: one named logger with a rotating file handler and
a console handler. Call setup_logging() once at startup; modules get
child loggers through get_logger(__name__).
"""
import logging
import os
from logging.handlers import RotatingFileHandler

from config.settings import settings

LOGGER_NAME = "zone_risk_monitor"
_FORMAT = "%(asctime)s - [%(levelname)s] - %(name)s - %(message)s"


def setup_logging(log_dir: str | None = None, level: str | None = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level or settings.LOG_LEVEL)
    if logger.handlers:
        return logger

    log_dir = log_dir or settings.LOG_DIR
    os.makedirs(log_dir, exist_ok=True)

    formatter = logging.Formatter(_FORMAT)

    file_handler = RotatingFileHandler(
        os.path.join(log_dir, "backend.log"),
        maxBytes=5_000_000,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Child of the application logger, e.g. zone_risk_monitor.src.analytics.risk."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
