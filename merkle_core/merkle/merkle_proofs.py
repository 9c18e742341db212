"""
Merkle Proofs
Inclusion-proof extraction, verification and transport.

This module provides:
- Side / SiblingHash / Proof: the proof data model
- proof_for: depth-first search for an item's proof
- find_proof / contains: membership-aware variants of proof_for
- proof_at: proof for the leaf at a given position
- verify / verify_against_root: recompute a root from an item and a proof
- encode_proof / decode_proof: JSON transport via ProofEnvelope
- MerkleProver / MerkleVerifier: class-based convenience wrappers

Proof order is bottom-up: index 0 is the sibling of the leaf itself,
the last element is the sibling of the node just below the root.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from pydantic import ValidationError

from merkle_core.crypto.hashing import (
    DEFAULT_HASH_ALGORITHM,
    HashFunction,
    hash_concat,
    hash_item,
    sha256,
    to_hex,
)
from merkle_core.merkle.merkle_tree import MerkleTree, Serializer
from merkle_core.merkle.nodes import Inner, Leaf, Node, node_height
from merkle_core.schemas.canonical import dumps_canonical, encode_item
from merkle_core.schemas.errors import ProofDecodeException
from merkle_core.schemas.proof import ProofEnvelope, SiblingHashRecord

logger = logging.getLogger(__name__)


class Side(str, Enum):
    """Position of a sibling relative to the node on the proof path."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class SiblingHash:
    """
    One proof element.

    Attributes:
        side: LEFT means the sibling is concatenated before the running
              digest, RIGHT means after it
        digest: The sibling node's digest
    """
    side: Side
    digest: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "side", Side(self.side))

    @classmethod
    def left(cls, digest: bytes) -> SiblingHash:
        return cls(side=Side.LEFT, digest=digest)

    @classmethod
    def right(cls, digest: bytes) -> SiblingHash:
        return cls(side=Side.RIGHT, digest=digest)


Proof = list[SiblingHash]


# =============================================================================
# Proof Extraction
# =============================================================================

def _search(node: Node, target: bytes, proof: Proof) -> bool:
    """
    Depth-first search for a leaf digest, left child first.

    On success each enclosing Inner node appends its other child,
    so siblings accumulate bottom-up while the stack unwinds.
    """
    if isinstance(node, Leaf):
        return node.digest == target

    if _search(node.left, target, proof):
        proof.append(SiblingHash.right(node.right.digest))
        return True
    if _search(node.right, target, proof):
        proof.append(SiblingHash.left(node.left.digest))
        return True
    return False


def find_proof(tree: MerkleTree, item: Any) -> Optional[Proof]:
    """
    Find the inclusion proof for an item.

    Args:
        tree: Tree to search
        item: Source item to prove

    Returns:
        The bottom-up proof for the first matching leaf (left to right),
        or None if no leaf matches. A single-leaf tree that contains the
        item yields an empty list.
    """
    target = tree.leaf_digest(item)
    proof: Proof = []
    if not _search(tree.root, target, proof):
        logger.debug(f"No leaf matches digest {to_hex(target)}")
        return None
    logger.debug(f"Found leaf {to_hex(target)} with proof of length {len(proof)}")
    return proof


def proof_for(tree: MerkleTree, item: Any) -> Proof:
    """
    Inclusion proof for an item; empty list if the item is absent.

    An absent item and the sole leaf of a single-leaf tree both yield
    an empty list. Use find_proof or contains to tell them apart.
    """
    proof = find_proof(tree, item)
    return proof if proof is not None else []


def contains(tree: MerkleTree, item: Any) -> bool:
    """Check whether any leaf of the tree commits to the item."""
    return find_proof(tree, item) is not None


def proof_at(tree: MerkleTree, index: int) -> Proof:
    """
    Inclusion proof for the leaf at a 0-based position.

    Unlike proof_for, this addresses a specific occurrence when the
    same item appears more than once.

    Raises:
        IndexError: If index is out of range
    """
    if index < 0 or index >= len(tree):
        raise IndexError(f"Leaf index {index} out of range for {len(tree)} leaves")

    # Every level is padded, so the bits of the index give the path
    # from the root: 0 goes left, 1 goes right.
    top_down: Proof = []
    node = tree.root
    level = node_height(tree.root) - 1
    while isinstance(node, Inner):
        if (index >> level) & 1:
            top_down.append(SiblingHash.left(node.left.digest))
            node = node.right
        else:
            top_down.append(SiblingHash.right(node.right.digest))
            node = node.left
        level -= 1

    top_down.reverse()
    return top_down


# =============================================================================
# Verification
# =============================================================================

def compute_root(
    item: Any,
    proof: Proof,
    hash_fn: HashFunction = sha256,
    serialize: Serializer = encode_item,
) -> bytes:
    """
    Recompute a root candidate from an item and a proof.

    For each sibling in order:
    - LEFT(s):  running = H(s + running)
    - RIGHT(s): running = H(running + s)
    """
    running = hash_item(item, hash_fn, serialize)
    for sibling in proof:
        if sibling.side == Side.LEFT:
            running = hash_concat(sibling.digest, running, hash_fn)
        else:
            running = hash_concat(running, sibling.digest, hash_fn)
    return running


def verify_against_root(
    root_hash: bytes,
    item: Any,
    proof: Proof,
    hash_fn: HashFunction = sha256,
    serialize: Serializer = encode_item,
) -> bool:
    """
    Verify an item and proof against a bare root digest.

    Returns:
        True if the recomputed root equals root_hash, False otherwise.
        Never raises for a proof that does not reconstruct the root.
    """
    candidate = compute_root(item, proof, hash_fn, serialize)
    valid = candidate == root_hash
    logger.debug(
        f"Proof of length {len(proof)} {'verified' if valid else 'rejected'} "
        f"against root {to_hex(root_hash)}"
    )
    return valid


def verify(tree: MerkleTree, item: Any, proof: Proof) -> bool:
    """
    Verify that an item and proof reconstruct the tree's root.

    For a single-leaf tree the proof is empty and this reduces to
    H(serialize(item)) == root digest.
    """
    return verify_against_root(
        tree.root_hash, item, proof, hash_fn=tree.hash_fn, serialize=tree.serialize
    )


# =============================================================================
# Transport
# =============================================================================

def proof_to_envelope(
    proof: Proof,
    algorithm: str = DEFAULT_HASH_ALGORITHM,
    root: Optional[bytes] = None,
) -> ProofEnvelope:
    """Wrap a proof in its transport schema."""
    return ProofEnvelope(
        algorithm=algorithm,
        root=to_hex(root) if root is not None else None,
        siblings=[
            SiblingHashRecord(side=s.side.value, digest=to_hex(s.digest))
            for s in proof
        ],
    )


def proof_from_envelope(envelope: ProofEnvelope) -> Proof:
    """Extract the domain proof from its transport schema."""
    return [
        SiblingHash(side=Side(record.side), digest=record.digest_bytes)
        for record in envelope.siblings
    ]


def encode_proof(
    proof: Proof,
    algorithm: str = DEFAULT_HASH_ALGORITHM,
    root: Optional[bytes] = None,
) -> str:
    """
    Serialize a proof to canonical JSON.

    Example output:
        {"algorithm":"sha256","siblings":[{"digest":"0x..","side":"right"}]}
    """
    return dumps_canonical(proof_to_envelope(proof, algorithm=algorithm, root=root))


def decode_proof(data: Union[str, bytes, dict[str, Any]]) -> ProofEnvelope:
    """
    Parse and validate a transported proof.

    Raises:
        ProofDecodeException: If the data is not a valid proof envelope
    """
    try:
        if isinstance(data, dict):
            return ProofEnvelope.model_validate(data)
        return ProofEnvelope.model_validate_json(data)
    except ValidationError as e:
        raise ProofDecodeException(
            message=f"Invalid proof envelope: {e.error_count()} validation error(s)",
            details={"errors": [err["msg"] for err in e.errors()]},
        ) from e


# =============================================================================
# Convenience Classes
# =============================================================================

class MerkleProver:
    """
    Convenience class for generating Merkle proofs.

    Example:
        >>> tree = build_tree(["a", "b", "c"])
        >>> proof = MerkleProver.prove(tree, "b")
        >>> MerkleVerifier.verify(tree, "b", proof)
        True
    """

    @staticmethod
    def prove(tree: MerkleTree, item: Any) -> Proof:
        """Proof for an item, empty if absent. See proof_for."""
        return proof_for(tree, item)

    @staticmethod
    def prove_index(tree: MerkleTree, index: int) -> Proof:
        """Proof for the leaf at a position. See proof_at."""
        return proof_at(tree, index)

    @staticmethod
    def prove_encoded(
        tree: MerkleTree,
        item: Any,
        algorithm: str = DEFAULT_HASH_ALGORITHM,
    ) -> Optional[str]:
        """
        Proof for an item serialized for transport, with the tree root.

        Returns:
            Canonical JSON envelope, or None if the item is absent
        """
        proof = find_proof(tree, item)
        if proof is None:
            return None
        return encode_proof(proof, algorithm=algorithm, root=tree.root_hash)


class MerkleVerifier:
    """Convenience class for verifying Merkle proofs."""

    @staticmethod
    def verify(tree: MerkleTree, item: Any, proof: Proof) -> bool:
        return verify(tree, item, proof)

    @staticmethod
    def verify_encoded(
        root_hash: bytes,
        item: Any,
        encoded_proof: Union[str, bytes],
        hash_fn: HashFunction = sha256,
        serialize: Serializer = encode_item,
    ) -> bool:
        """
        Verify a transported proof against a known root.

        The envelope's own root, when present, must match root_hash.
        A malformed envelope raises ProofDecodeException.
        """
        envelope = decode_proof(encoded_proof)
        if envelope.root_bytes is not None and envelope.root_bytes != root_hash:
            logger.debug("Proof envelope targets a different root")
            return False
        return verify_against_root(
            root_hash,
            item,
            proof_from_envelope(envelope),
            hash_fn=hash_fn,
            serialize=serialize,
        )


__all__ = [
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
    "MerkleProver",
    "MerkleVerifier",
]
