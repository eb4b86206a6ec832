"""
package: silencedis.member_access
"""

# <AUTOGEN_INIT>
from silencedis.member_access import (
    accessor,
    base,
    call_arguments,
    errors,
    reflection,
    xlogging,
)


__all__ = [
    "accessor",
    "base",
    "call_arguments",
    "errors",
    "reflection",
    "xlogging",
]
# </AUTOGEN_INIT>

from silencedis.member_access.accessor import MemberAccessor
from silencedis.member_access.errors import (
    IncompatibleInstanceError,
    InvalidArgumentError,
    MemberAccessError,
    ResolutionError,
    TypeMismatchError,
    VisibilityError,
)
from silencedis.member_access.reflection import PythonReflection, ReflectionPrimitive


__all__ += [
    "IncompatibleInstanceError",
    "InvalidArgumentError",
    "MemberAccessError",
    "MemberAccessor",
    "PythonReflection",
    "ReflectionPrimitive",
    "ResolutionError",
    "TypeMismatchError",
    "VisibilityError",
]

__version__ = "0.2.0"
