"""
Utility functions for the mqclient library
"""
import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Callable, Optional


class LogConst:
    """Logging defaults shared by the console tool and examples"""
    MAX_BYTES = 5 * 1024 * 1024  # 5MB
    BACKUP_COUNT = 5
    FILE_FORMAT = "%(asctime)s\t%(levelname)s\t%(name)s\t%(message)s"
    CONSOLE_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s: %(message)s"


def call_with_keyboard_interrupt(main_func: Callable[[], Optional[int]]) -> Optional[int]:
    """
    Call a main function, turning Ctrl+C into a message and exit code 130.

    Args:
        main_func: The main function to run

    Returns:
        The return value of main_func, or 130 when interrupted
    """
    try:
        return main_func()
    except KeyboardInterrupt:
        print("\n🛑 Interrupted by user (Ctrl+C)")
        return 130


def run_with_keyboard_interrupt(main_func: Callable[[], Optional[int]]) -> None:
    """
    Run a main function with graceful KeyboardInterrupt handling.

    The return value of main_func is used as the process exit code.

    Args:
        main_func: The main function to run
    """
    sys.exit(call_with_keyboard_interrupt(main_func))


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the mqclient logger with a console handler and an optional rotating file handler.

    Args:
        level: Console log level name
        log_file: Path of a log file, or None for console only

    Returns:
        The configured "mqclient" logger
    """
    logger = logging.getLogger("mqclient")
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    console_handler.setFormatter(logging.Formatter(LogConst.CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(console_handler)

    # File handler
    if log_file:
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=LogConst.MAX_BYTES,
            backupCount=LogConst.BACKUP_COUNT
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(fmt=LogConst.FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)

    return logger
