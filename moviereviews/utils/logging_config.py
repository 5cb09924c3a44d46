"""
Logging configuration for the movie reviews API and its scripts.

``setup_logging`` installs a console handler and, when a file name is given,
a size-rotated file handler on the root logger. Handlers it installed on an
earlier call are replaced; handlers added by anything else (pytest capture,
uvicorn) are left alone.
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import List, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = {
    'sqlalchemy.engine': logging.WARNING,
    'passlib': logging.ERROR,
    'uvicorn.access': logging.WARNING,
}

# Marks handlers owned by setup_logging
_OWNED = '_moviereviews_handler'


def parse_level(level: str) -> int:
    """
    Turn a level name such as 'info' into its numeric value.

    Raises:
        ValueError: If the name is not a standard logging level
    """
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def _owned(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    setattr(handler, _OWNED, True)
    return handler


def setup_logging(
    log_file: Optional[str] = None,
    level: str = "INFO",
    log_dir: str = "logs",
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5
) -> List[logging.Handler]:
    """
    Configure the root logger.

    Args:
        log_file: Name of a log file inside log_dir; console only when None
        level: Logging level name ('DEBUG', 'INFO', 'WARNING', 'ERROR')
        log_dir: Directory for the log file, created if missing
        max_bytes: Size at which the log file rotates
        backup_count: Number of rotated files to keep

    Returns:
        The handlers that were installed
    """
    log_level = parse_level(level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in [h for h in root_logger.handlers if getattr(h, _OWNED, False)]:
        root_logger.removeHandler(handler)
        handler.close()

    handlers = [_owned(logging.StreamHandler(sys.stdout), log_level, formatter)]

    if log_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        handlers.append(_owned(
            RotatingFileHandler(log_path / log_file, maxBytes=max_bytes, backupCount=backup_count),
            log_level,
            formatter,
        ))

    for handler in handlers:
        root_logger.addHandler(handler)

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)

    if log_file:
        root_logger.info("Logging to file: %s", log_path / log_file)

    return handlers


def configure_api_logging(settings) -> List[logging.Handler]:
    """
    Configure logging from API settings.

    SQL echo turns the SQLAlchemy engine logger back up to INFO.
    """
    handlers = setup_logging(
        log_file=settings.log_file,
        level=settings.log_level,
        log_dir=settings.log_dir,
    )
    if settings.echo_sql:
        logging.getLogger('sqlalchemy.engine').setLevel(logging.INFO)
    return handlers


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Get a named logger, optionally with its own level."""
    logger = logging.getLogger(name)
    if level:
        logger.setLevel(parse_level(level))
    return logger
