"""
Crypto - Hashing Utilities
Hash-function capability and helpers for Merkle commitments.

This module provides:
- HashFunction: the "hash these bytes" capability the tree is built with
- SHA-256 hashing for raw bytes (the default capability)
- A registry resolving hashlib algorithm names to HashFunction callables
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- Only fixed-size digests are accepted (shake_* is rejected)
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
from typing import Any, Callable

from merkle_core.schemas.canonical import encode_item
from merkle_core.schemas.errors import UnsupportedHashAlgorithmException


# A pure, side-effect free mapping from bytes to a digest.
HashFunction = Callable[[bytes], bytes]

DEFAULT_HASH_ALGORITHM = "sha256"

# Extendable-output functions need a caller-chosen length.
_VARIABLE_LENGTH_ALGORITHMS = frozenset({"shake_128", "shake_256"})


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def supported_algorithms() -> list[str]:
    """Sorted names of the hash algorithms get_hash_function accepts."""
    return sorted(hashlib.algorithms_guaranteed - _VARIABLE_LENGTH_ALGORITHMS)


def get_hash_function(name: str = DEFAULT_HASH_ALGORITHM) -> HashFunction:
    """
    Resolve a hashlib algorithm name to a HashFunction.

    Args:
        name: Algorithm name, case-insensitive (e.g. "sha256", "sha3_256",
              "blake2b"). Dashes are accepted in place of underscores.

    Returns:
        Callable mapping bytes to the algorithm's digest

    Raises:
        UnsupportedHashAlgorithmException: If the name is unknown or the
            algorithm produces variable-length output
    """
    normalized = name.strip().lower().replace("-", "_")
    if normalized == DEFAULT_HASH_ALGORITHM:
        return sha256

    if normalized in _VARIABLE_LENGTH_ALGORITHMS:
        raise UnsupportedHashAlgorithmException(
            message=f"Hash algorithm '{name}' has variable-length output",
            algorithm=name,
        )
    if normalized not in hashlib.algorithms_guaranteed:
        raise UnsupportedHashAlgorithmException(
            message=f"Unknown hash algorithm: {name}",
            algorithm=name,
            details={"supported": supported_algorithms()},
        )

    def _digest(data: bytes) -> bytes:
        return hashlib.new(normalized, data).digest()

    _digest.__name__ = normalized
    return _digest


def hash_concat(left: bytes, right: bytes, hash_fn: HashFunction = sha256) -> bytes:
    """
    Hash the concatenation of two byte sequences.

    This is used for computing Merkle parent hashes:
    parent = H(left + right), left always first.
    """
    return hash_fn(left + right)


def hash_item(
    item: Any,
    hash_fn: HashFunction = sha256,
    serialize: Callable[[Any], bytes] = encode_item,
) -> bytes:
    """
    Compute the leaf digest of a source item: H(serialize(item)).

    Raises:
        CanonicalizationException: If the default serializer cannot
            encode the item
    """
    return hash_fn(serialize(item))


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "HashFunction",
    "DEFAULT_HASH_ALGORITHM",
    "sha256",
    "supported_algorithms",
    "get_hash_function",
    "hash_concat",
    "hash_item",
    "to_hex",
    "from_hex",
]
