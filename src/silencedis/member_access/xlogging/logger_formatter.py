# File: src/silencedis/member_access/xlogging/logger_formatter.py
"""
Formatter used by the root stderr handler that CoreLogger instances propagate to.

Adds the record attributes ``levelName`` (colored), ``fileAndLine`` (path relative
to the working directory) and ``klassAndMethod`` for use in format strings.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Any, Literal

from colorama import Fore, Style

from silencedis.member_access.base.fs_helpers import fs_safe_relpath

from .logger_constants import SUPPRESS, TRACE


__all__ = ["CoreFormatter", "DEFAULT_FORMAT", "get_color_code"]


FormatStyle = Literal["%", "{", "$"]

DEFAULT_FORMAT = r"%(levelName)s %(fileAndLine)s %(klassAndMethod)s %(message)s"

COLOR_MAP: dict[int, str] = {
    SUPPRESS: Fore.BLUE,
    TRACE: Fore.MAGENTA,
    logging.DEBUG: Style.DIM,
    logging.INFO: Fore.WHITE,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.LIGHTRED_EX,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}


def get_color_code(levelno: int | None = None, *, enabled: bool = True) -> str:
    """
    Return the ANSI color prefix for a level number, or the reset code for None.

    NO_COLOR in the environment disables colors regardless of ``enabled``.
    """
    if not enabled or os.environ.get("NO_COLOR"):
        return ""
    if levelno is None:
        return Style.RESET_ALL
    return COLOR_MAP.get(levelno, "")


class CoreFormatter(logging.Formatter):
    """
    Formatter that adds file and line information, class and method names,
    and color-coded level names.
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: FormatStyle = "%",
        validate: bool = True,
        *,
        use_color: bool | None = None,
        defaults: dict[str, Any] | None = None,
    ) -> None:
        """
        :param fmt: The format string for log messages. Defaults to DEFAULT_FORMAT.
        :param datefmt: The date format string for log timestamps.
        :param style: The style for the format string (default is "%").
        :param validate: Whether to validate the format strings (default is True).
        :param use_color: Force colors on or off; None colors only when stderr is a tty.
        :param defaults: Default values for format fields.
        """
        super().__init__(
            fmt=fmt or DEFAULT_FORMAT,
            datefmt=datefmt,
            style=style,
            validate=validate,
            defaults=defaults,
        )
        self.use_color = sys.stderr.isatty() if use_color is None else use_color

    def format(self, record: logging.LogRecord) -> str:
        record.levelName = self.format_levelName(record)
        record.fileAndLine = self.format_fileAndLine(record.pathname, record.lineno)
        record.klassAndMethod = self.format_klassAndMethod(record)
        return super().format(record)

    def format_levelName(self, record: logging.LogRecord) -> str:
        color = get_color_code(record.levelno, enabled=self.use_color)
        reset = get_color_code(enabled=self.use_color) if color else ""
        return f"{color}{record.levelname}{reset}"

    @staticmethod
    def format_fileAndLine(file: str, lineno: int) -> str:
        if not file:
            return f"<unknown file>:{lineno}"
        return f"{fs_safe_relpath(file, Path.cwd())}:{lineno}"

    @staticmethod
    def format_klassAndMethod(record: logging.LogRecord) -> str:
        klass_name: str | None = getattr(record, "klass_name", None)
        if record.funcName == "<module>" or not klass_name:
            return record.funcName if record.funcName == "<module>" else f"{record.funcName}()"
        if record.funcName == "__init__":
            return f"{klass_name}()"
        return f"{klass_name}.{record.funcName}()"


# End of file: src/silencedis/member_access/xlogging/logger_formatter.py
