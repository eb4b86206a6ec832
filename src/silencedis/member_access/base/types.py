# File: src/silencedis/member_access/base/types.py

import types
from decimal import Decimal
from fractions import Fraction
from typing import (
    Annotated,
    Any,
    Final,
    Literal,
    Self,
    TypeAlias,
    Union,  # pyright: ignore[reportDeprecated]
    get_args,
    get_origin,
    is_typeddict,
)


# ---------- Static typing aliases (for annotations) ----------

PrimitiveNonStringTypes: TypeAlias = int | float | complex | bool | Decimal | Fraction | None
PrimitiveTypes: TypeAlias = PrimitiveNonStringTypes | str
ClassRef: TypeAlias = str | type

# ---------- Runtime tuples (for isinstance/issubclass) ----------

BUFFER_LIKE_TYPES: Final[tuple[type, ...]] = (range, bytes, bytearray, memoryview)
MAPPING_TYPES: Final[tuple[type, ...]] = (dict,)
SEQUENCE_TYPES: Final[tuple[type, ...]] = (list, tuple, set, frozenset)
PRIMITIVE_NON_STRING_TYPES: Final[tuple[type, ...]] = (
    int,
    float,
    complex,
    bool,
    Decimal,
    Fraction,
    type(None),
)
PRIMITIVE_TYPES: Final[tuple[type, ...]] = (*PRIMITIVE_NON_STRING_TYPES, str)
CONTAINER_TYPES: Final[tuple[type, ...]] = SEQUENCE_TYPES + MAPPING_TYPES
BUILTIN_TYPES: Final[tuple[type, ...]] = CONTAINER_TYPES + PRIMITIVE_TYPES + BUFFER_LIKE_TYPES


def is_object_instance(value: Any) -> bool:
    """
    Check if a value is an object whose members can be accessed by name.

    Builtin values (None, numbers, strings, bytes-like values, builtin containers)
    and classes themselves are not considered object instances. Instances of
    subclasses of builtin types (e.g. a ``dict`` subclass with extra attributes)
    are.

    :param value: Candidate instance.
    :return: True if ``value`` is a non-builtin, non-class instance.
    """
    if isinstance(value, type):
        return False
    return type(value) not in BUILTIN_TYPES


def istype(obj: object, *types_: object) -> bool:
    """
    Enhanced isinstance() supporting PEP 604 (X | Y), Unions, Optional and single types.

    Follows the numeric tower of PEP 484: ``int`` is accepted for ``float``, and
    ``int`` or ``float`` for ``complex``. ``Literal[...]`` matches its listed values,
    ``Annotated[T, ...]`` matches ``T`` and a ``TypedDict`` matches any ``dict``.
    Annotations that cannot be checked at runtime (``Any``, type variables,
    protocols without ``@runtime_checkable``, unresolved forward references) are
    treated as matching.

    :param obj: Object to check
    :param types_: One or more types or Union expressions
    :return: True if obj matches any of the resolved types
    """
    if not types_:
        raise ValueError("At least one type must be provided")

    for t in types_:
        if t is Any:
            return True
        if t is None:
            t = type(None)
        origin = get_origin(t)
        args = get_args(t)

        # Union[X, Y] or X | Y
        if origin in (Union, types.UnionType) and args:  # pyright: ignore[reportDeprecated]
            if istype(obj, *(type(None) if a is None else a for a in args)):
                return True
        elif origin is Literal:
            if any(type(obj) is type(a) and obj == a for a in args):
                return True
        elif origin is Annotated:
            if istype(obj, args[0]):
                return True
        # Raw types
        elif isinstance(t, type):
            if _isinstance(obj, t):
                return True
        # Generics like list[int] are checked against their origin only
        elif origin is not None and isinstance(origin, type):
            if _isinstance(obj, origin):
                return True
        # Graceful fallback for unsupported things (e.g., TypeVar, "ForwardRef")
        else:
            return True

    return False


def _isinstance(obj: object, t: type) -> bool:
    """isinstance() with numeric widening; True for classes that refuse instance checks."""
    if t is float and isinstance(obj, int):
        return True
    if t is complex and isinstance(obj, (int, float)):
        return True
    if is_typeddict(t):
        return isinstance(obj, dict)
    try:
        return isinstance(obj, t)
    except TypeError:
        # Protocols without @runtime_checkable
        return True


class Sentinel:
    """
    Robust singleton base class for sentinel objects such as MISSING.

    Behaves as a falsy, unique, singleton marker, distinct from None.
    """

    __slots__ = ()

    _repr_name: str = "SENTINEL"

    def __repr__(self) -> str:
        return self._repr_name

    def __bool__(self) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __copy__(self) -> Self:
        return self

    def __deepcopy__(
        self,
        _memo: dict[int, object],
    ) -> Self:
        return self

    def __new__(cls) -> Self:
        if "_instance" in cls.__dict__:
            return cls.__dict__["_instance"]
        instance = super().__new__(cls)
        setattr(cls, "_instance", instance)
        return instance


class Missing(Sentinel):
    """Singleton indicating a missing or unset value."""

    _repr_name = "MISSING"


MISSING: Final[Missing] = Missing()


# End of file: src/silencedis/member_access/base/types.py
