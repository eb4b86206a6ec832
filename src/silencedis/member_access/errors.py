# File: src/silencedis/member_access/errors.py
"""Error types raised by silencedis.member_access."""

from __future__ import annotations

from typing import Any


__all__ = [
    "IncompatibleInstanceError",
    "InvalidArgumentError",
    "MemberAccessError",
    "ResolutionError",
    "TypeMismatchError",
    "VisibilityError",
]


class MemberAccessError(Exception):
    """Base class for all member access errors."""


class InvalidArgumentError(MemberAccessError, TypeError):
    """Raised when call arguments have the wrong shape or type."""


class ResolutionError(MemberAccessError, LookupError):
    """Raised when a class or one of its members cannot be resolved."""

    class_name: str
    member_name: str | None

    def __init__(self, message: str, *, class_name: str, member_name: str | None = None) -> None:
        """
        Initialize a resolution failure.

        :param message: Human readable description.
        :param class_name: Class (or class reference) that was searched.
        :param member_name: Member that was not found, if any.
        """
        self.class_name = class_name
        self.member_name = member_name
        super().__init__(message)


class IncompatibleInstanceError(ResolutionError):
    """Raised when an instance is not an instance of the class it is accessed through."""


class VisibilityError(MemberAccessError, AttributeError):
    """Raised when a non-public member is touched without an accessibility override."""


class TypeMismatchError(MemberAccessError, TypeError):
    """Raised when a value does not match a property's declared type."""

    expected: Any
    actual: type

    def __init__(self, message: str, *, expected: Any, actual: type) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(message)


# End of file: src/silencedis/member_access/errors.py
