"""
Centralized logging configuration.

Provides consistent logging setup across the application with:
- a human-readable console format
- optional file rotation when a log directory is configured
"""

import os
import logging
import logging.handlers
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    logger: logging.Logger,
    log_level: str = 'INFO',
    log_dir: Optional[str] = None,
) -> logging.Logger:
    """
    Attach console and (optionally) rotating file handlers to ``logger``.

    Args:
        logger: Logger to configure, usually ``app.logger``
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for the rotating log file, no file handler if empty

    Returns:
        The configured logger
    """
    level = getattr(logging, str(log_level).upper(), logging.INFO)
    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            os.path.join(log_dir, 'vocabpractice.log'),
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # werkzeug request lines are noise below WARNING
    logging.getLogger('werkzeug').setLevel(logging.WARNING)

    return logger
