"""
Schemas & Serialization
File: __init__.py

Purpose: Export the public API for the schemas module.
"""

# Canonical serialization API
from .canonical import (
    BYTES_ITEM_TAG,
    CANONICAL_JSON_SEPARATORS,
    JSON_ITEM_TAG,
    canonicalize_value,
    dumps_canonical,
    encode_item,
    ensure_utc,
    format_datetime_canonical,
    loads_canonical,
)

# Error models and exceptions
from .errors import (
    CanonicalizationException,
    ConfigurationException,
    EmptyInputException,
    ErrorCodes,
    MerkleError,
    MerkleException,
    ProofDecodeException,
    RebuildFailedException,
    UnsupportedHashAlgorithmException,
)

# Proof transport
from .proof import (
    ProofEnvelope,
    SiblingHashRecord,
)

__all__ = [
    # Canonical
    "BYTES_ITEM_TAG",
    "CANONICAL_JSON_SEPARATORS",
    "JSON_ITEM_TAG",
    "canonicalize_value",
    "dumps_canonical",
    "encode_item",
    "ensure_utc",
    "format_datetime_canonical",
    "loads_canonical",
    # Errors
    "CanonicalizationException",
    "ConfigurationException",
    "EmptyInputException",
    "ErrorCodes",
    "MerkleError",
    "MerkleException",
    "ProofDecodeException",
    "RebuildFailedException",
    "UnsupportedHashAlgorithmException",
    # Proof transport
    "ProofEnvelope",
    "SiblingHashRecord",
]
