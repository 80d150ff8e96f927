"""Word Scramble - make as many words as you can from the letters of one root word."""

import sys

from loguru import logger

__version__ = "0.1.0"

LOG_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


def add_log_file(log_file: str, level: str = "INFO") -> int:
    """Send log records to a rotating file as well as the current sinks.

    Args:
        log_file: Path of the log file
        level: Minimum level written to the file

    Returns:
        The loguru handler id, for ``logger.remove()``
    """
    handler_id = logger.add(
        log_file,
        format=LOG_FILE_FORMAT,
        level=level,
        rotation="10 MB",
        retention="1 week",
    )
    logger.debug(f"Logging to {log_file} at {level}")
    return handler_id


def install_exception_hook() -> None:
    """Log uncaught exceptions, with traceback, before the program exits."""

    def exception_handler(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            # Ctrl+C ends a game, nothing to report
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return

        logger.opt(exception=(exc_type, exc_value, exc_traceback)).critical("Uncaught exception")

    sys.excepthook = exception_handler


__all__ = ["__version__", "add_log_file", "install_exception_hook"]
