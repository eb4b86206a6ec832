# File: src/silencedis/member_access/reflection.py
"""
Reflection primitive: resolve member handles, toggle their accessibility, use them.

Python does not enforce member visibility, so the handles here do: visibility is
derived from the declared member name, and a handle refuses to read or write a
non-public member until its accessibility flag has been enabled.

| Declared name                  | Visibility | Storage name on class ``C`` |
|--------------------------------|------------|-----------------------------|
| ``__name`` (no trailing ``__``) | PRIVATE    | ``_C__name``                |
| ``_name``                      | PROTECTED  | ``_name``                   |
| ``name``, ``__dunder__``       | PUBLIC     | ``name``                    |

Provides:
- ReflectionPrimitive: the protocol MemberAccessor depends on.
- PythonReflection: the default implementation over Python classes.
- MethodHandle / PropertyHandle: handles for one (class, member) pair.
"""

from __future__ import annotations

import enum
import importlib
import inspect
import types
from collections.abc import Callable
from typing import Any, Protocol

from silencedis.member_access.base import config
from silencedis.member_access.base.types import MISSING, ClassRef, istype
from silencedis.member_access.errors import (
    IncompatibleInstanceError,
    ResolutionError,
    TypeMismatchError,
    VisibilityError,
)
from silencedis.member_access.xlogging.logger_factory import create_logger


__all__ = [
    "MemberHandle",
    "MethodHandle",
    "PropertyHandle",
    "PythonReflection",
    "ReflectionPrimitive",
    "Visibility",
    "storage_name_for",
    "visibility_of",
]

_LOG = create_logger(__name__)

_METHOD_TYPES: tuple[type, ...] = (
    types.FunctionType,
    types.BuiltinFunctionType,
    staticmethod,
    classmethod,
)


class Visibility(enum.Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


def visibility_of(name: str) -> Visibility:
    """Return the visibility a member name declares."""
    if name.startswith("__") and not name.endswith("__"):
        return Visibility.PRIVATE
    if name.startswith("_") and not name.startswith("__"):
        return Visibility.PROTECTED
    return Visibility.PUBLIC


def storage_name_for(cls: type, name: str) -> str:
    """
    Return the attribute name under which ``cls`` stores member ``name``.

    Private names are mangled the way the compiler does it inside the body of ``cls``.
    A class whose name is all underscores does not mangle.
    """
    if visibility_of(name) is not Visibility.PRIVATE:
        return name
    class_token = cls.__name__.lstrip("_")
    if not class_token:
        return name
    return f"_{class_token}{name}"


class MemberHandle:
    """
    Resolved reference to one member of one class.

    The only mutable state is the ``accessible`` flag; it starts out False and must
    be restored by whoever enables it.
    """

    kind: str = "member"

    def __init__(self, cls: type, name: str, *, storage_name: str | None = None) -> None:
        self.cls = cls
        self.name = name
        self.visibility = visibility_of(name)
        self.storage_name = storage_name or storage_name_for(cls, name)
        self._accessible = False

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} {self.cls.__qualname__}.{self.name}"
            f" {self.visibility.value} accessible={self._accessible}>"
        )

    @property
    def accessible(self) -> bool:
        return self._accessible

    def set_accessible(self, accessible: bool) -> None:
        self._accessible = bool(accessible)

    def is_public(self) -> bool:
        return self.visibility is Visibility.PUBLIC

    def is_protected(self) -> bool:
        return self.visibility is Visibility.PROTECTED

    def is_private(self) -> bool:
        return self.visibility is Visibility.PRIVATE

    def _check_access(self) -> None:
        if not self.is_public() and not self._accessible:
            raise VisibilityError(
                f"Cannot access {self.visibility.value} {self.kind}"
                f" {self.cls.__qualname__}::{self.name}"
            )

    def _check_instance(self, instance: object) -> None:
        if not isinstance(instance, self.cls):
            raise IncompatibleInstanceError(
                f"Given object of type {type(instance).__qualname__} is not an instance"
                f" of {self.cls.__qualname__}",
                class_name=self.cls.__qualname__,
                member_name=self.name,
            )


class MethodHandle(MemberHandle):
    """Handle for a method, bound to instances without triggering overrides."""

    kind = "method"

    def __init__(
        self, cls: type, name: str, function: Any, *, storage_name: str | None = None
    ) -> None:
        super().__init__(cls, name, storage_name=storage_name)
        self.function = function

    def bind(self, instance: object) -> Callable[..., Any]:
        """
        Return the method of ``self.cls`` bound to ``instance``.

        Binding needs no accessibility override; the bound callable runs the
        method found on ``self.cls`` even when ``type(instance)`` overrides it.
        """
        self._check_instance(instance)
        binder = getattr(type(self.function), "__get__", None)
        if binder is None:
            return self.function
        return binder(self.function, instance, self.cls)


class PropertyHandle(MemberHandle):
    """
    Handle for a data member: a declared attribute, slot, property, or a dynamic
    instance attribute.

    ``declared`` is False for members only ever assigned on instances; such a member
    exists when the instance has it.
    """

    kind = "property"

    def __init__(
        self,
        cls: type,
        name: str,
        *,
        declared: bool,
        annotation: Any = MISSING,
        check_types: bool | None = None,
    ) -> None:
        super().__init__(cls, name)
        self.declared = declared
        self.annotation = annotation
        self.check_types = check_types

    def get_value(self, instance: object) -> Any:
        self._check_access()
        self._check_instance(instance)
        value = getattr(instance, self.storage_name, MISSING)
        if value is MISSING:
            raise self._missing_error(instance)
        return value

    def set_value(self, instance: object, value: Any) -> None:
        self._check_access()
        self._check_instance(instance)
        if not self.declared and not hasattr(instance, self.storage_name):
            raise self._missing_error(instance)
        self._check_type(value)
        setattr(instance, self.storage_name, value)

    def _check_type(self, value: Any) -> None:
        if self.annotation is MISSING:
            return
        check_types = self.check_types
        if check_types is None:
            check_types = config.type_checking_enabled()
        if check_types and not istype(value, self.annotation):
            raise TypeMismatchError(
                f"Cannot assign {type(value).__qualname__} to property"
                f" {self.cls.__qualname__}::{self.name} of type {_annotation_repr(self.annotation)}",
                expected=self.annotation,
                actual=type(value),
            )

    def _missing_error(self, instance: object) -> ResolutionError:
        return ResolutionError(
            f"Property {self.cls.__qualname__}::{self.name} does not exist"
            f" on {type(instance).__qualname__} instance",
            class_name=self.cls.__qualname__,
            member_name=self.name,
        )


class ReflectionPrimitive(Protocol):
    """The member-resolution capability MemberAccessor is built on."""

    def resolve_class(self, class_ref: ClassRef, instance: object) -> type: ...

    def resolve_method(self, cls: type, name: str) -> MethodHandle: ...

    def resolve_property(self, cls: type, name: str) -> PropertyHandle: ...


class PythonReflection:
    """
    ReflectionPrimitive over ordinary Python classes.

    :param check_types: Validate assigned values against declared annotations.
        None defers to config.type_checking_enabled() at assignment time.
    """

    def __init__(self, *, check_types: bool | None = None) -> None:
        self.check_types = check_types

    def resolve_class(self, class_ref: ClassRef, instance: object) -> type:
        """
        Resolve a class reference for operations on ``instance``.

        A class is returned as is. A name is matched against the instance's MRO by
        ``__qualname__``, ``__name__``, ``module.qualname`` or ``module:qualname``;
        failing that it is imported as a dotted ``module.qualname`` or
        ``module:qualname`` path.

        :raises ResolutionError: If no such class exists.
        """
        if isinstance(class_ref, type):
            return class_ref

        for klass in type(instance).__mro__:
            candidates = {
                klass.__qualname__,
                klass.__name__,
                f"{klass.__module__}.{klass.__qualname__}",
                f"{klass.__module__}:{klass.__qualname__}",
            }
            if class_ref in candidates:
                return klass

        klass = _import_class(class_ref)
        if klass is None:
            raise ResolutionError(f'Class "{class_ref}" does not exist', class_name=class_ref)
        return klass

    def resolve_method(self, cls: type, name: str) -> MethodHandle:
        """
        Resolve method ``name`` as seen from ``cls`` (inherited methods included).

        A private method that ``cls`` does not define itself is looked up on the base
        classes, each under its own mangled name; the nearest one wins.

        :raises ResolutionError: If ``cls`` has no such attribute, or it is not a method.
        """
        storage_name = storage_name_for(cls, name)
        function = inspect.getattr_static(cls, storage_name, MISSING)
        if function is MISSING and visibility_of(name) is Visibility.PRIVATE:
            for klass in cls.__mro__[1:]:
                function = vars(klass).get(storage_name_for(klass, name), MISSING)
                if function is not MISSING:
                    storage_name = storage_name_for(klass, name)
                    break
        if function is MISSING:
            raise ResolutionError(
                f"Method {cls.__qualname__}::{name}() does not exist",
                class_name=cls.__qualname__,
                member_name=name,
            )
        if isinstance(function, property) or not (
            isinstance(function, _METHOD_TYPES) or callable(function)
        ):
            raise ResolutionError(
                f"{cls.__qualname__}::{name} is not a method",
                class_name=cls.__qualname__,
                member_name=name,
            )
        _LOG.debug("resolved method %s.%s as %s", cls.__qualname__, name, storage_name)
        return MethodHandle(cls, name, function, storage_name=storage_name)

    def resolve_property(self, cls: type, name: str) -> PropertyHandle:
        """
        Resolve property ``name`` as seen from ``cls``.

        A property is declared when a class in the MRO annotates it, lists it in
        ``__slots__`` or defines it as a class attribute or descriptor. Undeclared
        names resolve to dynamic instance attributes unless instances of ``cls``
        have no ``__dict__``.

        :raises ResolutionError: If the name is a method, or cannot exist on instances.
        """
        storage_name = storage_name_for(cls, name)
        declared = False
        annotation: Any = MISSING

        for klass in cls.__mro__:
            if klass is object:
                continue
            annotations = _class_annotations(klass)
            if storage_name in annotations:
                declared = True
                if annotation is MISSING:
                    annotation = annotations[storage_name]
            if storage_name in vars(klass):
                attribute = vars(klass)[storage_name]
                if isinstance(attribute, _METHOD_TYPES):
                    raise ResolutionError(
                        f"{cls.__qualname__}::{name} is a method, not a property",
                        class_name=cls.__qualname__,
                        member_name=name,
                    )
                declared = True
            if declared and annotation is not MISSING:
                break

        if not declared and not any("__dict__" in vars(klass) for klass in cls.__mro__):
            raise ResolutionError(
                f"Property {cls.__qualname__}::{name} does not exist",
                class_name=cls.__qualname__,
                member_name=name,
            )
        _LOG.debug(
            "resolved property %s.%s as %s (declared=%s)",
            cls.__qualname__,
            name,
            storage_name,
            declared,
        )
        return PropertyHandle(
            cls,
            name,
            declared=declared,
            annotation=annotation,
            check_types=self.check_types,
        )


def _class_annotations(klass: type) -> dict[str, Any]:
    """Return the annotations declared directly on ``klass``, evaluated where possible."""
    try:
        return inspect.get_annotations(klass, eval_str=True)
    except (AttributeError, NameError, SyntaxError, TypeError):
        return inspect.get_annotations(klass)


def _import_class(path: str) -> type | None:
    """Import ``module.qualname`` or ``module:qualname``; return None if it is not a class."""
    if ":" in path:
        module_name, _, qualname = path.partition(":")
        splits = [(module_name, qualname)]
    else:
        parts = path.split(".")
        splits = [(".".join(parts[:i]), ".".join(parts[i:])) for i in range(len(parts) - 1, 0, -1)]

    for module_name, qualname in splits:
        try:
            target: Any = importlib.import_module(module_name)
        except (ImportError, ValueError):
            continue
        for attr in qualname.split("."):
            target = getattr(target, attr, None)
            if target is None:
                break
        if isinstance(target, type):
            return target
    return None


def _annotation_repr(annotation: Any) -> str:
    if isinstance(annotation, type):
        return annotation.__qualname__
    return repr(annotation)


# End of file: src/silencedis/member_access/reflection.py
