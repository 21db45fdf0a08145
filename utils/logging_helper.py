"""
Logging helper for the NeuroSense engine.
"""
import sys
import logging
from pathlib import Path
from datetime import datetime
from logging.handlers import RotatingFileHandler

from config import LOGGING_CONFIG

# Global logger
logger = None


def setup_logging(log_dir=None, log_level=None, log_to_file=None):
    """
    Initialize logging with console and file handlers.

    Args:
        log_dir (Path): Directory where log files will be stored
        log_level (int): Logging level (default: LOG_LEVEL from config)
        log_to_file (bool): Attach a rotating file handler (default: LOG_TO_FILE)

    Returns:
        logger: Configured logger instance
    """
    global logger

    if logger is not None:
        return logger  # Already configured

    if log_level is None:
        log_level = getattr(logging, LOGGING_CONFIG["LOG_LEVEL"], logging.INFO)
    if log_to_file is None:
        log_to_file = LOGGING_CONFIG["LOG_TO_FILE"]

    engine_logger = logging.getLogger(LOGGING_CONFIG["LOGGER_NAME"])
    engine_logger.setLevel(log_level)

    # Prevent duplicate handlers if called multiple times
    if engine_logger.handlers:
        logger = engine_logger
        return logger

    file_formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(module)s - %(message)s')
    console_formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(console_formatter)
    engine_logger.addHandler(console_handler)

    log_file = None
    if log_to_file and log_dir is not None:
        logs_dir = Path(log_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)

        log_file = logs_dir / "neurosense.log"
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=LOGGING_CONFIG["LOG_MAX_BYTES"],
            backupCount=LOGGING_CONFIG["LOG_BACKUP_COUNT"],
            encoding='utf-8'
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(file_formatter)
        engine_logger.addHandler(file_handler)

    logger = engine_logger

    logger.info("===== NeuroSense Logging Initialized =====")
    if log_file:
        logger.info(f"Log file: {log_file}")
    logger.info(f"Date: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    logger.debug(f"Python version: {sys.version}")

    return logger


def get_logger():
    """
    Get the engine logger.

    Returns:
        logger: The configured logger, or the unconfigured ``neurosense``
        logger when ``setup_logging`` has not run yet
    """
    if logger is not None:
        return logger
    return logging.getLogger(LOGGING_CONFIG["LOGGER_NAME"])
