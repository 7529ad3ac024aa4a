"""
Hashing and byte buffer utilities.
"""
from .buffers import (
    is_hex_str,
    buffer_reverse,
    buffer_concat,
    buffer_compare,
)
from .hashing import (
    HashFunction,
    HASH_FUNCTIONS,
    sha256,
    sha3_256,
    double_sha256,
    get_hash_function,
    hash_leaf,
    to_hex,
    from_hex,
)

__all__ = [
    "is_hex_str",
    "buffer_reverse",
    "buffer_concat",
    "buffer_compare",
    "HashFunction",
    "HASH_FUNCTIONS",
    "sha256",
    "sha3_256",
    "double_sha256",
    "get_hash_function",
    "hash_leaf",
    "to_hex",
    "from_hex",
]
