"""
Merkle Tree Implementation
Deterministic Merkle tree construction and incremental append.

This module provides:
- MerkleTree: immutable tree value (root node + ordered source items)
- build_tree: fold an item list bottom-up into a single root
- append_leaf: add an item and rebuild the whole tree
- compute_tree_depth: number of levels for a given leaf count

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = H(serialize(item))
2. Parent hashing: parent = H(left + right), left always first
3. Padding rule: an odd last node at any level is paired with itself
4. Empty input: build_tree([]) raises EmptyInputException
5. Single leaf: root = leaf (no combination step)

Determinism Notes:
- No randomness or non-deterministic ordering
- This module never sorts items - it trusts input order
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Sequence

from merkle_core.crypto.hashing import HashFunction, hash_item, sha256, to_hex
from merkle_core.merkle.nodes import Inner, Leaf, Node, node_height
from merkle_core.schemas.canonical import encode_item
from merkle_core.schemas.errors import EmptyInputException, RebuildFailedException

if TYPE_CHECKING:
    from merkle_core.merkle.merkle_proofs import Proof

logger = logging.getLogger(__name__)

Serializer = Callable[[Any], bytes]


@dataclass(frozen=True)
class MerkleTree:
    """
    An immutable Merkle tree.

    Attributes:
        root: Root node; a Leaf for single-item trees
        leaves: Source items in committed order
        hash_fn: Hash function the tree was built with
        serialize: Item serializer the tree was built with
    """
    root: Node
    leaves: tuple[Any, ...]
    hash_fn: HashFunction = sha256
    serialize: Serializer = encode_item

    @property
    def root_hash(self) -> bytes:
        return self.root.digest

    @property
    def depth(self) -> int:
        """Levels from the leaves to the root, inclusive."""
        return node_height(self.root) + 1

    def __len__(self) -> int:
        return len(self.leaves)

    def leaf_digest(self, item: Any) -> bytes:
        """Digest a leaf holding ``item`` would carry in this tree."""
        return hash_item(item, self.hash_fn, self.serialize)

    def append(self, item: Any) -> MerkleTree:
        """Return a new tree with ``item`` appended. See append_leaf."""
        return append_leaf(self, item)

    def proof_for(self, item: Any) -> Proof:
        from merkle_core.merkle.merkle_proofs import proof_for
        return proof_for(self, item)

    def verify(self, item: Any, proof: Proof) -> bool:
        from merkle_core.merkle.merkle_proofs import verify
        return verify(self, item, proof)

    def __repr__(self) -> str:
        return f"MerkleTree(leaves={len(self.leaves)}, root={to_hex(self.root_hash)})"


def _reduce_level(nodes: Sequence[Node], hash_fn: HashFunction) -> list[Node]:
    """Pair nodes two at a time; an odd last node is paired with itself."""
    parents: list[Node] = []
    for i in range(0, len(nodes), 2):
        left = nodes[i]
        right = nodes[i + 1] if i + 1 < len(nodes) else left
        parents.append(Inner.combine(left, right, hash_fn))
    return parents


def build_tree(
    items: Sequence[Any],
    hash_fn: HashFunction = sha256,
    serialize: Serializer = encode_item,
) -> MerkleTree:
    """
    Build a Merkle tree from an ordered sequence of items.

    Algorithm:
    1. If empty: raise EmptyInputException
    2. Map each item to Leaf(H(serialize(item)))
    3. Repeatedly replace the level with its parents:
       - Pair (n0, n1), (n2, n3), ... in order
       - If the count is odd, pair the last node with itself
    4. Stop when one node remains; it is the root

    Example: [a, b, c] -> [ab, cc] -> [root]

    Args:
        items: Source items. Order matters and is preserved.
        hash_fn: Hash function capability (default SHA-256)
        serialize: Item to bytes mapping (default encode_item)

    Returns:
        MerkleTree committing to the items

    Raises:
        EmptyInputException: If items is empty
    """
    if len(items) == 0:
        raise EmptyInputException()

    leaves = tuple(items)
    current_level: list[Node] = [
        Leaf(digest=hash_item(item, hash_fn, serialize)) for item in leaves
    ]

    while len(current_level) > 1:
        current_level = _reduce_level(current_level, hash_fn)

    tree = MerkleTree(
        root=current_level[0],
        leaves=leaves,
        hash_fn=hash_fn,
        serialize=serialize,
    )
    logger.debug(f"Built Merkle tree with {len(leaves)} leaves, root {to_hex(tree.root_hash)}")
    return tree


def append_leaf(tree: MerkleTree, item: Any) -> MerkleTree:
    """
    Append an item and rebuild the tree from the full leaf list.

    The given tree is left untouched; a new tree value is returned,
    built with the same hash function and serializer.

    Raises:
        RebuildFailedException: If the rebuild fails
    """
    updated = tree.leaves + (item,)
    try:
        new_tree = build_tree(updated, hash_fn=tree.hash_fn, serialize=tree.serialize)
    except EmptyInputException as e:
        raise RebuildFailedException(
            message=f"Failed to rebuild Merkle tree: {e.message}",
            leaf_count=len(updated),
        ) from e

    logger.debug(
        f"Appended leaf #{len(updated)}: root {to_hex(tree.root_hash)} -> {to_hex(new_tree.root_hash)}"
    )
    return new_tree


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the depth of a Merkle tree with given number of leaves.

    Depth is the number of levels from leaves to root (inclusive).
    A single leaf has depth 1, two leaves have depth 2, etc.

    Returns:
        Tree depth (0 for no leaves)
    """
    if num_leaves <= 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


__all__ = [
    "MerkleTree",
    "Serializer",
    "build_tree",
    "append_leaf",
    "compute_tree_depth",
]
