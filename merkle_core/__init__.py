"""
Merkle Core

Merkle hash tree with inclusion proofs over ordered, opaque items.
"""

from merkle_core.crypto import get_hash_function, sha256
from merkle_core.merkle import (
    Inner,
    Leaf,
    MerkleTree,
    Proof,
    Side,
    SiblingHash,
    append_leaf,
    build_tree,
    contains,
    find_proof,
    proof_at,
    proof_for,
    verify,
    verify_against_root,
)
from merkle_core.schemas import (
    EmptyInputException,
    MerkleException,
    RebuildFailedException,
    encode_item,
)

__version__ = "0.1.0"

__all__ = [
    "get_hash_function",
    "sha256",
    "Inner",
    "Leaf",
    "MerkleTree",
    "Proof",
    "Side",
    "SiblingHash",
    "append_leaf",
    "build_tree",
    "contains",
    "find_proof",
    "proof_at",
    "proof_for",
    "verify",
    "verify_against_root",
    "EmptyInputException",
    "MerkleException",
    "RebuildFailedException",
    "encode_item",
]
