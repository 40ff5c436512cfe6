import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from tracker.core.config import settings

# Include the function name so feed callbacks can be told apart
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s] - %(message)s"


def setup_logger(name: str, level: int = None, log_dir: Path = None) -> logging.Logger:
    logger = logging.getLogger(name)

    logger.setLevel(level or logging.getLevelName(settings.LOG_LEVEL))

    # Clear any existing handlers
    logger.handlers = []

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.INFO)
    logger.addHandler(console_handler)

    log_dir = Path(log_dir or settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    # File handler with DEBUG level, every received event ends up here
    log_file = log_dir / f"{name.replace('.', '_')}.log"
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10*1024*1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(logging.DEBUG)
    logger.addHandler(file_handler)

    error_file = log_dir / f"{name.replace('.', '_')}_error.log"
    error_handler = RotatingFileHandler(
        error_file,
        maxBytes=10*1024*1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    error_handler.setFormatter(formatter)
    error_handler.setLevel(logging.ERROR)
    logger.addHandler(error_handler)

    return logger
