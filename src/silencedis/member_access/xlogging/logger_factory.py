# File: src/silencedis/member_access/xlogging/logger_factory.py
"""
Logger factory for creating and configuring CoreLogger instances.

Loggers are created through logging.getLogger() so they take part in the
standard hierarchy (parents, propagation, caplog).
"""

import inspect
import logging
import sys
from pathlib import Path

from silencedis.member_access.xlogging.core_logger import CoreLogger


def create_logger(
    name: str | None,
    *,
    level: int | str | None = None,
    stacklevel: int = 1,
) -> CoreLogger:
    """
    Return a CoreLogger with a consistent, context-aware name.

    Handles:
    - Normal imports (uses given name)
    - Direct script execution (__main__ becomes the script stem)
    - Anonymous loggers (uses the caller's module name)
    """
    logger_name: str = name or ""

    if logger_name == "__main__":
        arg0 = Path(sys.argv[0]) if sys.argv and sys.argv[0] else None
        logger_name = arg0.stem if arg0 and arg0.exists() else "embedded_main"

    if not logger_name:
        logger_name = get_caller_logger_name(stacklevel=stacklevel + 1)

    existing = logging.Logger.manager.loggerDict.get(logger_name)
    if isinstance(existing, CoreLogger):
        logger = existing
    else:
        logger = _get_core_logger_from_logging(logger_name)

    if level is not None:
        logger.setLevel(level)
    return logger


def _get_core_logger_from_logging(name: str) -> CoreLogger:
    """
    Create or retrieve a CoreLogger through logging.getLogger().

    Temporarily sets CoreLogger as the logger class so the new logger is wired
    into the logging hierarchy.

    :raises TypeError: If a plain Logger with this name already exists.
    """
    logging_class = logging.getLoggerClass()
    if logging_class is not CoreLogger:
        logging.setLoggerClass(CoreLogger)
    try:
        logger = logging.getLogger(name)
    finally:
        if logging_class is not CoreLogger:
            logging.setLoggerClass(logging_class)
    if not isinstance(logger, CoreLogger):
        raise TypeError(f"Failed to create CoreLogger: {logger!r}")
    return logger


def get_caller_logger_name(*, stacklevel: int = 1) -> str:
    """
    Resolve the default logger name from the caller's module.
    """
    frame = inspect.currentframe()
    try:
        for _ in range(stacklevel):
            frame = frame.f_back if frame else None
        module = inspect.getmodule(frame) if frame else None
        name = module.__name__ if module else ""
    finally:
        del frame
    if not name or name == "__main__":
        executable = sys.argv[0] if sys.argv and sys.argv[0] else sys.executable
        name = Path(executable).stem
    return name


# End of file: src/silencedis/member_access/xlogging/logger_factory.py
