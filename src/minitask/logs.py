import logging
import sys
from pathlib import Path

CONSOLE_FORMAT = '%(levelname)s: %(message)s'
DEBUG_CONSOLE_FORMAT = '%(levelname)-8s [%(name)s] %(message)s'
FILE_FORMAT = '[%(asctime)s] %(levelname)-8s [%(name)s:%(funcName)s:%(lineno)d] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(settings=None):
    """
    Configure the ``minitask`` logger.

    Args:
        settings: A ``minitask.config.Settings``. When omitted the console shows
            warnings and errors only and no log file is written.
    """
    level_name = getattr(settings, 'log_level', 'WARNING')
    is_debug = bool(getattr(settings, 'debug', False))
    log_file = getattr(settings, 'log_file', None)

    level = logging.DEBUG if is_debug else getattr(logging, level_name, logging.WARNING)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(DEBUG_CONSOLE_FORMAT if is_debug else CONSOLE_FORMAT))
    console_handler.setLevel(level)

    logger = logging.getLogger('minitask')
    logger.setLevel(logging.DEBUG)  # Logger accepts all, handlers filter
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger

# Defaults until settings are loaded
setup_logging()

def get_logger(name: str = None):
    """Get a logger instance for a specific module."""
    if name:
        return logging.getLogger(f'minitask.{name}')
    return logging.getLogger('minitask')
