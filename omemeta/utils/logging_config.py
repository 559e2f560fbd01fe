import logging
import logging.handlers
import sys
from typing import Optional, Union

PACKAGE_LOGGER = "omemeta"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    log_level: Union[int, str] = logging.INFO, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up logging for the package.

    Validation and correction messages are emitted by loggers under
    "omemeta", so configuring that logger covers every module.

    Args:
        log_level: Minimum level to display, as a number or a name like "DEBUG".
        log_file: Path to a rotating log file. If None, logs go to stdout only.

    Returns:
        The configured package logger.
    """
    if isinstance(log_level, str):
        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {log_level}")
        log_level = level

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(log_level)

    # Reconfiguring replaces handlers instead of stacking duplicates
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_file, maxBytes=10 * 1024 * 1024, backupCount=5
            )
        )

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug(f"Logging configured at {logging.getLevelName(log_level)}")
    return logger
