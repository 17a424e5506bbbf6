"""
Centralized logging configuration.

``setup_logging`` is called once by the application factory; modules get
their logger with ``get_logger(__name__)``.
"""
import logging
import sys
from pathlib import Path
from typing import Optional


_logging_configured = False


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the root logger with a console handler and an optional file handler.

    Repeated calls are no-ops, so building several apps (as the tests do)
    does not stack handlers.

    Args:
        log_level: Console level name, case insensitive
        log_file: Path of a log file; no file handler when omitted

    Returns:
        The root logger
    """
    global _logging_configured

    root_logger = logging.getLogger()
    if _logging_configured:
        return root_logger

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.addHandler(console_handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(logging.DEBUG)

    # These log every request at DEBUG
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    _logging_configured = True
    root_logger.debug(f"Logging configured: level={log_level}, file={log_file}")
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module, normally called with ``__name__``."""
    return logging.getLogger(name)
