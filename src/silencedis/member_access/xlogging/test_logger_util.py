# File: src/silencedis/member_access/xlogging/test_logger_util.py
"""
Tests for LogLevelConfig: parsing, overrides, matching, and lifecycle.

Covers:
- DSL parsing from LOG_LEVEL / LOG_LEVELS
- Per-logger overrides from LOG_LEVEL_* variables
- Precedence rules and matching semantics
- Singleton behavior and LOG_ROOT_LEVEL
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator

import pytest

from silencedis.member_access.xlogging import logger_util as lu
from silencedis.member_access.xlogging.logger_constants import TRACE
from silencedis.member_access.xlogging.logger_util import LogEnvVar, LogLevelConfig


# ---------- Fixtures ----------


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear LOG_* level vars and reset singleton around each test, skipping .env loads."""
    monkeypatch.setattr(lu, "fs_load_dotenv", lambda *a, **k: False)

    for k in [k for k in os.environ if k.startswith(("LOG_LEVEL", "LOG_ROOT_LEVEL"))]:
        monkeypatch.delenv(k, raising=False)

    monkeypatch.setattr(lu, "_log_level_config_instance", None, raising=False)
    yield
    monkeypatch.setattr(lu, "_log_level_config_instance", None, raising=False)


# ---------- Parsing: DSL in LOG_LEVELS ----------


class TestEnvironmentParsingDSL:
    def test_bare_level_is_default(self, monkeypatch: pytest.MonkeyPatch, clean_env: None) -> None:
        monkeypatch.setenv("LOG_LEVELS", "DEBUG")
        cfg = LogLevelConfig()
        assert cfg.get_effective_level("any.module") == logging.DEBUG

    @pytest.mark.parametrize(
        "value",
        ["pkg1.*:DEBUG;pkg2.*:INFO", "pkg1.*=DEBUG,pkg2.*=INFO", "pkg1.*:DEBUG pkg2.*:INFO"],
    )
    def test_separators(
        self, monkeypatch: pytest.MonkeyPatch, clean_env: None, value: str
    ) -> None:
        monkeypatch.setenv("LOG_LEVELS", value)
        cfg = LogLevelConfig()
        assert cfg.pattern_to_level["pkg1.*"] == logging.DEBUG
        assert cfg.pattern_to_level["pkg2.*"] == logging.INFO

    def test_custom_and_numeric_levels(
        self, monkeypatch: pytest.MonkeyPatch, clean_env: None
    ) -> None:
        monkeypatch.setenv("LOG_LEVEL", "a:TRACE; b:15; c:bogus")
        cfg = LogLevelConfig()
        assert cfg.pattern_to_level["a"] == TRACE
        assert cfg.pattern_to_level["b"] == 15
        assert "c" not in cfg.pattern_to_level

    def test_root_pattern_is_default(self, monkeypatch: pytest.MonkeyPatch, clean_env: None) -> None:
        monkeypatch.setenv("LOG_LEVELS", "root:ERROR")
        assert LogLevelConfig().get_effective_level("x") == logging.ERROR


# ---------- Per-logger overrides ----------


class TestPerLoggerOverrides:
    @pytest.mark.parametrize(
        ("name", "module"),
        [
            ("LOG_LEVEL", ""),
            ("LOG_LEVELS_ROOT", ""),
            ("LOG_LEVEL_SILENCEDIS_MEMBER__ACCESS", "silencedis.member_access"),
            ("LOG_LEVEL_PKG_CORE", "pkg.core"),
        ],
    )
    def test_env_var_names(self, name: str, module: str) -> None:
        var = LogEnvVar.from_env_var(name, "DEBUG")
        assert var is not None
        assert var.module == module

    @pytest.mark.parametrize("name", ["LOGLEVEL", "LOG_LEVEL_lower", "MY_LOG_LEVEL"])
    def test_unrelated_names_are_ignored(self, name: str) -> None:
        assert LogEnvVar.from_env_var(name, "DEBUG") is None

    def test_module_override(self, monkeypatch: pytest.MonkeyPatch, clean_env: None) -> None:
        monkeypatch.setenv("LOG_LEVEL_SILENCEDIS_MEMBER__ACCESS", "DEBUG")
        cfg = LogLevelConfig()
        assert cfg.get_effective_level("silencedis.member_access.accessor") == logging.DEBUG
        assert cfg.get_effective_level("silencedis.other") == logging.WARNING

    def test_module_relative_patterns(
        self, monkeypatch: pytest.MonkeyPatch, clean_env: None
    ) -> None:
        monkeypatch.setenv("LOG_LEVELS_PKG", "core:INFO; ERROR")
        cfg = LogLevelConfig()
        assert cfg.pattern_to_level["pkg.core"] == logging.INFO
        assert cfg.pattern_to_level["pkg"] == logging.ERROR


# ---------- Precedence ----------


class TestPrecedence:
    @pytest.fixture
    def cfg(self, monkeypatch: pytest.MonkeyPatch, clean_env: None) -> LogLevelConfig:
        monkeypatch.setenv("LOG_LEVELS", "pkg.*:INFO; pkg.core:ERROR; pkg.core.io*:DEBUG; CRITICAL")
        return LogLevelConfig()

    @pytest.mark.parametrize(
        ("logger_name", "expected"),
        [
            ("pkg.core", logging.ERROR),
            ("PKG.Core", logging.ERROR),
            ("pkg.core.sub", logging.ERROR),
            ("pkg.other", logging.INFO),
            ("other", logging.CRITICAL),
        ],
    )
    def test_effective_level(self, cfg: LogLevelConfig, logger_name: str, expected: int) -> None:
        assert cfg.get_effective_level(logger_name) == expected

    def test_longest_glob_prefix_wins(self, monkeypatch: pytest.MonkeyPatch, clean_env: None) -> None:
        monkeypatch.setenv("LOG_LEVELS", "pkg.*:INFO; pkg.core.io*:DEBUG")
        assert LogLevelConfig().get_effective_level("pkg.core.iox") == logging.DEBUG

    def test_fallback_default(self, clean_env: None) -> None:
        cfg = LogLevelConfig()
        assert cfg.get_effective_level("x") == logging.WARNING
        assert cfg.get_effective_level("x", default=logging.INFO) == logging.INFO


# ---------- Lifecycle ----------


class TestLifecycle:
    def test_singleton(self, clean_env: None) -> None:
        assert LogLevelConfig.get_instance() is LogLevelConfig.get_instance()

    def test_update_from_environment(
        self, monkeypatch: pytest.MonkeyPatch, clean_env: None
    ) -> None:
        cfg = LogLevelConfig()
        monkeypatch.setenv("LOG_LEVELS", "pkg:INFO")
        cfg.update_from_environment()
        assert cfg.get_effective_level("pkg") == logging.INFO

    @pytest.mark.parametrize(("raw", "expected"), [("DEBUG", logging.DEBUG), ("trace", TRACE), ("x", None)])
    def test_root_level_from_environment(
        self, monkeypatch: pytest.MonkeyPatch, clean_env: None, raw: str, expected: int | None
    ) -> None:
        monkeypatch.setenv("LOG_ROOT_LEVEL", raw)
        assert lu.get_root_level_from_environment() == expected

    def test_root_level_unset(self, clean_env: None) -> None:
        assert lu.get_root_level_from_environment() is None


# End of file: src/silencedis/member_access/xlogging/test_logger_util.py
