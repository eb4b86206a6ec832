# File: src/silencedis/member_access/base/config.py
"""
Runtime configuration for member access.

Uses thread-local storage so that overrides are isolated per thread, the same
way test-mode and analysis-mode flags are handled elsewhere in the package.

Exports:
- type_checking_enabled(): check or override whether property writes validate
  the declared annotation of the property.
- type_checking_context(): context manager that scopes such an override.

Environment:
- MEMBER_ACCESS_CHECK_TYPES: "0", "false", "no" or "off" disables type checking.
  Any other value, or no value, leaves it enabled. Read after loading `.env`.
"""

from __future__ import annotations

import os
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from silencedis.member_access.base.fs_helpers import fs_load_dotenv


CHECK_TYPES_ENV_VAR = "MEMBER_ACCESS_CHECK_TYPES"

_FALSE_VALUES: frozenset[str] = frozenset({"0", "false", "no", "off"})

_tls = threading.local()


@dataclass
class TLSAttrs:
    """Thread-local flags for member access configuration."""

    check_types_override: bool | None = None


def _get_tls() -> TLSAttrs:
    """Return the current thread's TLSAttrs instance, initializing if needed."""
    try:
        return _tls.state
    except AttributeError:
        _tls.state = TLSAttrs()
        return _tls.state


def type_checking_enabled(
    *,
    unset_override: bool = False,
    override: bool | None = None,
) -> bool:
    """
    Check if property writes are validated against declared annotations, with optional override.

    Detection order:
      1. Explicit override (thread-local).
      2. MEMBER_ACCESS_CHECK_TYPES environment variable (after loading `.env`).
      3. Enabled.

    :param unset_override: If True, clears any prior override for this thread.
    :param override: If True or False, sets the override for this thread.
    :return: True if type checking is active, False otherwise.
    """
    tls = _get_tls()
    if unset_override:
        tls.check_types_override = None
    if override is not None:
        tls.check_types_override = override
        return override
    if tls.check_types_override is not None:
        return tls.check_types_override

    fs_load_dotenv()
    raw = os.environ.get(CHECK_TYPES_ENV_VAR, "").strip().lower()
    return raw not in _FALSE_VALUES


@contextmanager
def type_checking_context(enabled: bool) -> Iterator[None]:
    """
    Context manager to enable or disable type checking temporarily.

    Restores the previous override on exit. Nested contexts are supported.
    """
    tls = _get_tls()
    previous_state = tls.check_types_override
    tls.check_types_override = enabled
    try:
        yield
    finally:
        tls.check_types_override = previous_state


# End of file: src/silencedis/member_access/base/config.py
