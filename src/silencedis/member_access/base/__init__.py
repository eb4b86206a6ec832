"""
package: silencedis.member_access.base
"""

# <AUTOGEN_INIT>
from silencedis.member_access.base import (
    config,
    fs_helpers,
    types,
)


__all__ = [
    "config",
    "fs_helpers",
    "types",
]
# </AUTOGEN_INIT>
