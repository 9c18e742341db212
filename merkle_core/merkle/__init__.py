"""
Merkle Tree and Inclusion Proofs
Deterministic Merkle tree construction + proof extraction/verification.

This module provides:
- Leaf / Inner: immutable node model
- MerkleTree: tree value (root node + ordered source items)
- build_tree / append_leaf: construction and incremental append
- proof_for / find_proof / contains / proof_at: proof extraction
- verify / verify_against_root: proof verification
- encode_proof / decode_proof: JSON transport of proofs

Canonical Commitment Rules:
1. Leaf hashing: H(serialize(item)), encode_item by default
2. Parent hashing: H(left + right)
3. Padding: pair the last node with itself if a level is odd
4. Empty input: EmptyInputException
5. Single leaf: root = leaf

Usage:
    from merkle_core.merkle import build_tree, proof_for, verify

    tree = build_tree(["A", "B", "C", "D"])
    proof = proof_for(tree, "A")
    assert verify(tree, "A", proof)

    tree = tree.append("E")
"""
from .nodes import (
    Leaf,
    Inner,
    Node,
    iter_leaves,
    node_height,
)

from .merkle_tree import (
    MerkleTree,
    Serializer,
    build_tree,
    append_leaf,
    compute_tree_depth,
)

from .merkle_proofs import (
    Side,
    SiblingHash,
    Proof,
    find_proof,
    proof_for,
    contains,
    proof_at,
    compute_root,
    verify_against_root,
    verify,
    proof_to_envelope,
    proof_from_envelope,
    encode_proof,
    decode_proof,
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Node model
    "Leaf",
    "Inner",
    "Node",
    "iter_leaves",
    "node_height",
    # Tree
    "MerkleTree",
    "Serializer",
    "build_tree",
    "append_leaf",
    "compute_tree_depth",
    # Proofs
    "Side",
    "SiblingHash",
    "Proof",
    "find_proof",
    "proof_for",
    "contains",
    "proof_at",
    "compute_root",
    "verify_against_root",
    "verify",
    "proof_to_envelope",
    "proof_from_envelope",
    "encode_proof",
    "decode_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
