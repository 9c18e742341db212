"""
Core cryptographic utilities.

Provides the pluggable hash-function capability used by the Merkle tree.
"""
from .hashing import (
    DEFAULT_HASH_ALGORITHM,
    HashFunction,
    sha256,
    supported_algorithms,
    get_hash_function,
    hash_concat,
    hash_item,
    to_hex,
    from_hex,
)

__all__ = [
    "DEFAULT_HASH_ALGORITHM",
    "HashFunction",
    "sha256",
    "supported_algorithms",
    "get_hash_function",
    "hash_concat",
    "hash_item",
    "to_hex",
    "from_hex",
]
