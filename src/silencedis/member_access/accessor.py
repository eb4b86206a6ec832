# File: src/silencedis/member_access/accessor.py
"""
Access to protected and private members of arbitrary objects, by name.

Intended for test code that has to inspect or manipulate internal state without
widening an object's public interface.

Example:
    >>> class Vault:
    ...     def __init__(self):
    ...         self.__secret = "s3cr3t"
    ...         self._attempts = 0
    ...     def _unlock(self, code):
    ...         return code == self.__secret
    >>> accessor = MemberAccessor()
    >>> accessor.get_protected_property(Vault(), "__secret")
    's3cr3t'
    >>> accessor.get_protected_method(Vault(), "_unlock")("s3cr3t")
    True
    >>> vault = Vault()
    >>> accessor.set_protected_property("Vault", vault, "_attempts", 3)
    >>> accessor.get_protected_property(vault, "_attempts")
    3
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from silencedis.member_access.call_arguments import (
    MemberRequest,
    normalize,
    parse_call_arguments,
)
from silencedis.member_access.reflection import (
    MemberHandle,
    MethodHandle,
    PropertyHandle,
    PythonReflection,
    ReflectionPrimitive,
)
from silencedis.member_access.xlogging.logger_factory import create_logger


__all__ = [
    "MemberAccessor",
    "accessibility_override",
]

_LOG = create_logger(__name__)


@contextmanager
def accessibility_override(handle: MemberHandle) -> Iterator[MemberHandle]:
    """
    Make a non-public member accessible for the duration of the context.

    Public members are left untouched. The previous accessibility flag is restored
    on every exit path, including when the body raises.

    :param handle: Handle whose accessibility is overridden.
    :yield: The same handle.
    """
    if handle.is_public():
        yield handle
        return

    previous = handle.accessible
    handle.set_accessible(True)
    _LOG.trace("accessibility enabled for %r", handle)
    try:
        yield handle
    finally:
        handle.set_accessible(previous)
        _LOG.trace("accessibility restored for %r", handle)


class MemberAccessor:
    """
    Resolves, caches and uses member handles for protected and private members.

    Handles are cached per accessor instance, by class and then member name, for the
    lifetime of the accessor; nothing is ever evicted. Two accessors never share
    handles.

    Not safe for uncoordinated use from several threads: populating the cache and
    toggling the accessibility of one cached handle are not synchronized. Use one
    accessor per thread, or lock around calls.
    """

    def __init__(self, reflection: ReflectionPrimitive | None = None) -> None:
        """
        :param reflection: Member resolution primitive; defaults to PythonReflection().
        """
        self._reflection: ReflectionPrimitive = reflection or PythonReflection()
        self._method_handles: dict[type, dict[str, MethodHandle]] = {}
        self._property_handles: dict[type, dict[str, PropertyHandle]] = {}

    def __repr__(self) -> str:
        methods, properties = self.cached_handle_count()
        return f"<{type(self).__name__} methods={methods} properties={properties}>"

    def cached_handle_count(self) -> tuple[int, int]:
        """Return the number of cached (method, property) handles."""
        return (
            sum(len(by_name) for by_name in self._method_handles.values()),
            sum(len(by_name) for by_name in self._property_handles.values()),
        )

    def get_protected_method(self, *params: Any) -> Callable[..., Any]:
        """
        Return a method of an object, bound to that object, whatever its visibility.

        ``get_protected_method(class_ref, instance, name)`` or
        ``get_protected_method(instance, name)``.

        With an explicit class the method is the one found on that class, not an
        override from ``type(instance)``.

        :raises InvalidArgumentError: For invalid arguments.
        :raises ResolutionError: If the class or method does not exist.
        """
        request = self._request(params, with_value=False)
        handle = self._get_reflection_method(request.cls, request.member_name)
        return handle.bind(request.instance)

    def get_protected_property(self, *params: Any) -> Any:
        """
        Return the value of a property of an object, whatever its visibility.

        ``get_protected_property(class_ref, instance, name)`` or
        ``get_protected_property(instance, name)``.

        :raises InvalidArgumentError: For invalid arguments.
        :raises ResolutionError: If the class or property does not exist.
        """
        request = self._request(params, with_value=False)
        handle = self._get_reflection_property(request.cls, request.member_name)
        with accessibility_override(handle):
            return handle.get_value(request.instance)

    def set_protected_property(self, *params: Any) -> None:
        """
        Set a property of an object, whatever its visibility.

        ``set_protected_property(class_ref, instance, name, value)`` or
        ``set_protected_property(instance, name, value)``.

        :raises InvalidArgumentError: For invalid arguments.
        :raises ResolutionError: If the class or property does not exist.
        :raises TypeMismatchError: If ``value`` does not match the declared type.
        """
        request = self._request(params, with_value=True)
        handle = self._get_reflection_property(request.cls, request.member_name)
        with accessibility_override(handle):
            handle.set_value(request.instance, request.value)

    def _request(self, params: tuple[Any, ...], *, with_value: bool) -> MemberRequest:
        return normalize(parse_call_arguments(params, with_value=with_value), self._reflection)

    def _get_reflection_method(self, cls: type, name: str) -> MethodHandle:
        """Return the cached method handle for (cls, name), resolving it on first use."""
        handle = self._method_handles.get(cls, {}).get(name)
        if handle is None:
            handle = self._reflection.resolve_method(cls, name)
            self._method_handles.setdefault(cls, {})[name] = handle
            _LOG.debug("cached %r", handle)
        else:
            _LOG.trace("cache hit %r", handle)
        return handle

    def _get_reflection_property(self, cls: type, name: str) -> PropertyHandle:
        """Return the cached property handle for (cls, name), resolving it on first use."""
        handle = self._property_handles.get(cls, {}).get(name)
        if handle is None:
            handle = self._reflection.resolve_property(cls, name)
            self._property_handles.setdefault(cls, {})[name] = handle
            _LOG.debug("cached %r", handle)
        else:
            _LOG.trace("cache hit %r", handle)
        return handle


# End of file: src/silencedis/member_access/accessor.py
