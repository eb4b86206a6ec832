"""
Environment variable-driven log level configuration.

Sources (a `.env` file is loaded first, without overriding the environment):
- Pattern DSL strings in LOG_LEVEL / LOG_LEVELS, e.g. ``"silencedis.*:DEBUG; WARNING"``
- Per-logger overrides in variables like LOG_LEVEL_SILENCEDIS_MEMBER_ACCESS_ACCESSOR
  (``_`` separates dotted name parts, ``__`` stands for a literal underscore)
- LOG_ROOT_LEVEL for the root logger threshold, applied by initialize_root()

Resolution precedence for a logger name: exact > ancestor > best glob > bare default > fallback.
"""

from __future__ import annotations

import fnmatch
import logging
import os
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import ClassVar, Final, NamedTuple

from silencedis.member_access.base.fs_helpers import fs_load_dotenv
from silencedis.member_access.xlogging.logger_constants import initialize_logger_constants


__all__ = ["LogLevelConfig", "get_root_level_from_environment"]

_LOG_VAR_FRAGMENT_SEPARATOR_RX: Final[re.Pattern[str]] = re.compile(r"[;, ]+")
_LOG_VAR_ASSIGNMENT_OPERATOR_RX: Final[re.Pattern[str]] = re.compile(r"[:=]+")

_log_level_config_instance: LogLevelConfig | None = None


def _level_names_mapping() -> dict[str, int]:
    """Return uppercase level names (including TRACE/SUPPRESS) mapped to numbers."""
    initialize_logger_constants()
    return {
        k.upper(): v
        for k, v in logging.getLevelNamesMapping().items()
        if isinstance(k, str) and k.isupper() and isinstance(v, int)
    }


def _level_from_text(txt: str, level_map: dict[str, int]) -> int | None:
    """Return numeric level from a name or decimal number string, else None."""
    s = txt.strip().strip("\"'")
    if not s:
        return None
    if s.isdigit():
        return int(s, 10)
    lvl = level_map.get(s.upper())
    if lvl is not None and lvl != logging.NOTSET:
        return lvl
    return None


def get_root_level_from_environment() -> int | None:
    """
    Return the root logger level from LOG_ROOT_LEVEL, or None if unset or invalid.
    """
    fs_load_dotenv()
    raw = os.environ.get("LOG_ROOT_LEVEL")
    if not raw:
        return None
    return _level_from_text(raw, _level_names_mapping())


@dataclass(slots=True)
class LogEnvVar:
    """
    Parsed representation of a LOG_LEVEL / LOG_LEVELS environment variable.

    The optional suffix names the module the patterns are relative to
    (``__`` -> ``_`` and ``_`` -> ``.``); ``ROOT`` or no suffix means global.
    """

    NAME_RX: ClassVar[re.Pattern[str]] = re.compile(
        r"^(?P<BASENAME>LOG_LEVELS?)(?P<SUFFIX>(?:_[A-Z][A-Z0-9_]*)*)$"
    )

    module: str = ""
    value: str = field(default="", repr=False)

    @classmethod
    def from_env_var(cls, name: str, value: str) -> LogEnvVar | None:
        """Return a LogEnvVar if the given (name, value) is valid, else None."""
        re_match = cls.NAME_RX.match(name)
        if re_match is None:
            return None
        suffix: str = re_match["SUFFIX"].lstrip("_")
        if not suffix or suffix.upper() == "ROOT":
            module = ""
        else:
            module = suffix.replace("__", "\0").replace("_", ".").replace("\0", "_").lower()
        return cls(module=module, value=value)

    @classmethod
    def from_environ(cls) -> Iterator[LogEnvVar]:
        """Yield LogEnvVar instances for all matching environment variables."""
        fs_load_dotenv()
        for name, value in sorted(os.environ.items(), reverse=True):
            env_var = cls.from_env_var(name, value)
            if env_var:
                yield env_var


class LogEnvPatternLevel(NamedTuple):
    """Mapping from a pattern string to an integer log level."""

    pattern: str
    level: int


@dataclass(slots=True)
class LogLevelConfig:
    """
    Resolve per-logger levels from environment variables.

    An empty pattern holds the bare default level.
    """

    pattern_to_level: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.pattern_to_level:
            self.update_from_environment()

    def update_from_environment(self) -> None:
        """Rebuild pattern->level mappings from current environment."""
        self.pattern_to_level.clear()
        level_map = _level_names_mapping()
        for var in LogEnvVar.from_environ():
            for dsl in self.parse_log_var(var, level_map):
                self.pattern_to_level[dsl.pattern] = dsl.level

    def get_effective_level(self, logger_name: str, *, default: int = logging.WARNING) -> int:
        """Return the configured level for a logger name."""
        name_lc = logger_name.lower()
        lc_map: dict[str, int] = {k.lower(): v for k, v in self.pattern_to_level.items() if k}

        if name_lc in lc_map:
            return lc_map[name_lc]

        parts = name_lc.split(".")
        for i in range(len(parts) - 1, 0, -1):
            ancestor = ".".join(parts[:i])
            if ancestor in lc_map:
                return lc_map[ancestor]

        best: tuple[int, int] | None = None
        for pat, level in lc_map.items():
            if not any(ch in pat for ch in "*?[") or not fnmatch.fnmatch(name_lc, pat):
                continue
            score = min((i for i, ch in enumerate(pat) if ch in "*?["), default=len(pat))
            if best is None or score > best[0]:
                best = (score, level)
        if best is not None:
            return best[1]

        return self.pattern_to_level.get("", default)

    @classmethod
    def get_instance(cls) -> LogLevelConfig:
        """Return the singleton LogLevelConfig instance, creating it if needed."""
        global _log_level_config_instance
        if not _log_level_config_instance:
            _log_level_config_instance = LogLevelConfig()
        return _log_level_config_instance

    @staticmethod
    def parse_log_var(var: LogEnvVar, level_map: dict[str, int]) -> Iterator[LogEnvPatternLevel]:
        """Parse one LogEnvVar into pattern->level mappings, skipping unknown levels."""
        for fragment in _LOG_VAR_FRAGMENT_SEPARATOR_RX.split(var.value):
            if not fragment.strip():
                continue
            parts = _LOG_VAR_ASSIGNMENT_OPERATOR_RX.split(fragment.strip(), maxsplit=1)
            if len(parts) == 2:
                pattern = parts[0].strip().strip("'\"")
                level_txt = parts[1]
            else:
                pattern = ""  # bare level -> default
                level_txt = parts[0]

            if var.module:
                pattern = f"{var.module}.{pattern}" if pattern not in {"", "root"} else var.module
            if pattern.lower() == "root":
                pattern = ""

            level = _level_from_text(level_txt, level_map)
            if level is None:
                continue
            yield LogEnvPatternLevel(pattern, level)
