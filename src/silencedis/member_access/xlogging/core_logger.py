# File: src/silencedis/member_access/xlogging/core_logger.py
"""
Structured logging with environment-driven configuration.

Example:
    >>> from silencedis.member_access.xlogging.logger_factory import create_logger
    >>> logger = create_logger(__name__)
    >>> with logger.prefix_with("[cache]"):
    ...     logger.debug("resolved %s", "Vault.__secret")

Features:
- Custom levels: TRACE, SUPPRESS
- Caller class name captured into the record (``klass_name``)
- Context-local prefix context manager

Design:
- Only the root logger owns handlers/formatters; CoreLogger instances propagate.
- Log levels are controlled per-logger (via environment and LogLevelConfig).
- initialize_root() is the only entry point for root setup; its state is kept
  as an attribute on the root logger, never in a module-global.
"""

from __future__ import annotations

import contextvars
import inspect
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, ClassVar, TextIO

from .logger_constants import TRACE, initialize_logger_constants
from .logger_formatter import CoreFormatter
from .logger_util import LogLevelConfig, get_root_level_from_environment


__all__: list[str] = [
    "CoreLogger",
    "initialize_root",
]

_LOG_ROOT_ATTR_NAME = "_silencedis_corelogger_initialized"
K_KLASS_NAME = "klass_name"

_log_prefix: contextvars.ContextVar[str] = contextvars.ContextVar("log_prefix", default="")


class CoreLogger(logging.Logger):
    """
    Application logger that extends logging.Logger with:

    - A TRACE level below DEBUG and a matching .trace() method.
    - The calling class name recorded for the formatter.
    - Prefix context manager for scoped message prefixes.

    Handlers are not attached directly; all CoreLogger instances propagate
    to the root logger, which holds a single stderr handler per initialize_root().
    """

    _INTERNAL_FRAME_OFFSET: ClassVar[int] = 2  # _emit() + wrapper method (debug/info/log)

    def __init__(
        self,
        name: str,
        level: int | str | None = logging.NOTSET,
    ) -> None:
        """
        Initialize the CoreLogger with a name and log level.

        When no explicit level is given the level comes from LogLevelConfig, and it is
        never set below the root logger's effective level.

        :param name: The name of the logger, typically the module name.
        :param level: The initial log level for the logger. Defaults to NOTSET.
        """
        initialize_logger_constants()

        if level in {logging.NOTSET, "NOTSET", "", None}:
            level = LogLevelConfig.get_instance().get_effective_level(name)
        super().__init__(name, level)

        root_level = logging.getLogger().getEffectiveLevel()
        if self.level < root_level:
            self.setLevel(root_level)

    def __repr__(self) -> str:
        level = self.getEffectiveLevel()
        return f"<{self.__class__.__name__} '{self.name}' {logging.getLevelName(level)}={level}>"

    def log(self, level: int, msg: object, *args: Any, **kwargs: Any) -> None:
        """Emit a log record at an explicit level."""
        self._emit(level, msg, args, kwargs)

    def trace(self, msg: object, *args: Any, **kwargs: Any) -> None:
        """Log a message at TRACE level (below DEBUG)."""
        self._emit(TRACE, msg, args, kwargs)

    def debug(self, msg: object, *args: Any, **kwargs: Any) -> None:
        self._emit(logging.DEBUG, msg, args, kwargs)

    def info(self, msg: object, *args: Any, **kwargs: Any) -> None:
        self._emit(logging.INFO, msg, args, kwargs)

    def warning(self, msg: object, *args: Any, **kwargs: Any) -> None:
        self._emit(logging.WARNING, msg, args, kwargs)

    def error(self, msg: object, *args: Any, **kwargs: Any) -> None:
        self._emit(logging.ERROR, msg, args, kwargs)

    def exception(self, msg: object, *args: Any, **kwargs: Any) -> None:
        """Log a message at ERROR level with exception info."""
        kwargs.setdefault("exc_info", True)
        self._emit(logging.ERROR, msg, args, kwargs)

    def critical(self, msg: object, *args: Any, **kwargs: Any) -> None:
        self._emit(logging.CRITICAL, msg, args, kwargs)

    @contextmanager
    def prefix_with(self, prefix: str) -> Iterator[None]:
        """
        Context manager to prefix all log messages within the current context.

        Supports nesting; uses contextvars so concurrent contexts do not interfere.

        :param prefix: The prefix string to prepend to all log messages.
        """
        current_prefix = _log_prefix.get()
        token = _log_prefix.set(f"{current_prefix}{prefix} > ")
        try:
            yield
        finally:
            _log_prefix.reset(token)

    def _emit(self, level: int, msg: object, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        """
        Apply prefix and caller class, then delegate to logging.Logger.log().

        Keeps the standard handler, filter and propagation behavior.
        """
        initialize_root()
        if not self.isEnabledFor(level):
            return

        caller_stacklevel: int = kwargs.pop("stacklevel", 1)
        extra: dict[str, Any] = dict(kwargs.pop("extra", None) or {})
        klass_name = _caller_class_name(caller_stacklevel + self._INTERNAL_FRAME_OFFSET - 1)
        if klass_name:
            extra.setdefault(K_KLASS_NAME, klass_name)

        prefix = _log_prefix.get()
        if prefix:
            msg = f"{prefix}{msg}"

        super().log(
            level,
            msg,
            *args,
            stacklevel=caller_stacklevel + self._INTERNAL_FRAME_OFFSET,
            extra=extra,
            **kwargs,
        )


def _caller_class_name(depth: int) -> str | None:
    """Return the class name of ``self`` in the frame ``depth`` levels above the caller."""
    frame = inspect.currentframe()
    try:
        for _ in range(depth + 1):
            if frame is None:
                return None
            frame = frame.f_back
        if frame is None:
            return None
        owner = frame.f_locals.get("self")
        return type(owner).__name__ if owner is not None else None
    finally:
        # Break reference cycle: frame -> f_locals -> frame
        del frame


def initialize_root(
    fmt: str | None = None,
    datefmt: str | None = None,
    level: int | str | None = None,
    force: bool = False,
    stream: TextIO | None = None,
) -> None:
    """
    Idempotently configure the root logger for CoreLogger.

    Behavior:
    - Ensures exactly one stderr StreamHandler with CoreFormatter exists.
    - If `force=True`, removes and recreates the stderr handler.
    - If `force=False` and already initialized, returns immediately.
    - Sets root level to `level` if provided, else LOG_ROOT_LEVEL from the
      environment, else WARNING if the root level is NOTSET.
    - Does not modify handlers owned by the host application.

    :param fmt: Format string. Defaults to the CoreFormatter default.
    :param datefmt: Date format.
    :param level: Root logger level (int or name).
    :param force: Reinitialize even if already initialized.
    :param stream: Stream for the handler, default sys.stderr.
    """
    root: logging.Logger = logging.getLogger()
    if getattr(root, _LOG_ROOT_ATTR_NAME, False) and not force:
        return
    setattr(root, _LOG_ROOT_ATTR_NAME, True)

    initialize_logger_constants()
    stream = stream or sys.stderr

    if force:
        root.handlers = [
            h
            for h in root.handlers
            if not (isinstance(h, logging.StreamHandler) and h.stream is stream)
        ]

    if not any(isinstance(h, logging.StreamHandler) and h.stream is stream for h in root.handlers):
        handler: logging.StreamHandler[TextIO] = logging.StreamHandler(stream)
        handler.setFormatter(CoreFormatter(fmt, datefmt))
        root.addHandler(handler)

    if level is None:
        level = get_root_level_from_environment()
    if level is not None:
        if isinstance(level, str):
            level = logging.getLevelNamesMapping().get(level.upper(), logging.WARNING)
        root.setLevel(level)
    elif root.getEffectiveLevel() == logging.NOTSET:
        root.setLevel(logging.WARNING)


# End of file: src/silencedis/member_access/xlogging/core_logger.py
