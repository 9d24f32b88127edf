"""
Schema-driven RLP codec.

A `Profile` names a `Kind`; `Struct` and `Array` kinds nest further
profiles. The profiler walks a profile tree against an object to encode it,
or against a decoded node tree to rebuild a mapping of named fields.
"""

from .kinds import (  # noqa: F401
    Array,
    Buffer,
    CompactFixedHexBlob,
    FixedHexBlob,
    HexBlob,
    Kind,
    Numeric,
    OptionalFixedHexBlob,
    Struct,
)
from .profile import Profile  # noqa: F401
from .profiler import decode_object, encode_object, pack, unpack  # noqa: F401
