# File: src/silencedis/member_access/call_arguments.py
"""
Parsing of the two accepted call shapes into one request record.

Shapes (``value`` only for property writes):
- ``(class_ref, instance, member_name[, value])`` where ``class_ref`` is a class
  name or a class.
- ``(instance, member_name[, value])`` where the class is ``type(instance)``.

The first positional argument decides the shape: a ``str`` or a ``type`` selects the
explicit-class shape, anything else the inferred one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeAlias

from silencedis.member_access.base.types import MISSING, ClassRef, is_object_instance
from silencedis.member_access.errors import InvalidArgumentError
from silencedis.member_access.reflection import ReflectionPrimitive


__all__ = [
    "CallArguments",
    "ExplicitClassArguments",
    "InferredClassArguments",
    "MemberRequest",
    "check_on_member_name",
    "check_on_object",
    "normalize",
    "parse_call_arguments",
]


@dataclass(frozen=True, slots=True)
class ExplicitClassArguments:
    class_ref: ClassRef
    instance: Any
    member_name: Any
    value: Any = MISSING


@dataclass(frozen=True, slots=True)
class InferredClassArguments:
    instance: Any
    member_name: Any
    value: Any = MISSING


CallArguments: TypeAlias = ExplicitClassArguments | InferredClassArguments


@dataclass(frozen=True, slots=True)
class MemberRequest:
    """A validated request: the class to resolve against, the instance, the member."""

    cls: type
    instance: object
    member_name: str
    value: Any = MISSING


def parse_call_arguments(params: tuple[Any, ...], *, with_value: bool = False) -> CallArguments:
    """
    Split positional parameters into one of the two call shapes.

    :param params: Positional parameters as passed by the caller.
    :param with_value: True when the shape carries a trailing value (property writes).
    :raises InvalidArgumentError: If the number of parameters fits neither shape.
    """
    extra = 1 if with_value else 0
    if params and isinstance(params[0], (str, type)):
        if len(params) != 3 + extra:
            raise InvalidArgumentError(
                f"Expected {3 + extra} arguments (class, object, name{', value' if with_value else ''}),"
                f" got {len(params)}"
            )
        return ExplicitClassArguments(*params)

    if len(params) != 2 + extra:
        raise InvalidArgumentError(
            f"Expected {2 + extra} arguments (object, name{', value' if with_value else ''}),"
            f" got {len(params)}"
        )
    return InferredClassArguments(*params)


def check_on_object(instance: Any) -> None:
    """
    :raises InvalidArgumentError: If ``instance`` is not an object whose members can be accessed.
    """
    if not is_object_instance(instance):
        raise InvalidArgumentError('The parameter "object" must be an object')


def check_on_member_name(name: Any) -> None:
    """
    :raises InvalidArgumentError: If ``name`` is not a string.
    """
    if not isinstance(name, str):
        raise InvalidArgumentError('The parameter "name" must be a string')


def normalize(args: CallArguments, reflection: ReflectionPrimitive) -> MemberRequest:
    """
    Validate call arguments and resolve the class they refer to.

    Validation runs before class resolution, so invalid arguments never reach
    the reflection primitive.
    """
    check_on_object(args.instance)
    check_on_member_name(args.member_name)

    match args:
        case ExplicitClassArguments(class_ref=class_ref):
            cls = reflection.resolve_class(class_ref, args.instance)
        case InferredClassArguments():
            cls = type(args.instance)

    return MemberRequest(cls, args.instance, args.member_name, args.value)


# End of file: src/silencedis/member_access/call_arguments.py
