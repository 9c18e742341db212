"""
Merkle Node Model
Immutable tree nodes: Leaf and Inner.

A node is constructed once and never mutated. Children are shared
references, so an odd node paired with itself appears as both the
left and right child of its parent.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union

from merkle_core.crypto.hashing import HashFunction, hash_concat


@dataclass(frozen=True)
class Leaf:
    """
    Node wrapping exactly one source item's digest.

    Attributes:
        digest: H(serialize(item))
    """
    digest: bytes


@dataclass(frozen=True)
class Inner:
    """
    Node combining two children's digests.

    Attributes:
        digest: H(left.digest + right.digest)
        left: Left child
        right: Right child (the left child itself for a self-duplicated pair)
    """
    digest: bytes
    left: Node
    right: Node

    @property
    def is_self_duplicated(self) -> bool:
        """True if this node pairs an unpaired last node with itself."""
        return self.left is self.right

    @classmethod
    def combine(cls, left: Node, right: Node, hash_fn: HashFunction) -> Inner:
        """Create the parent of two nodes, left digest first."""
        return cls(
            digest=hash_concat(left.digest, right.digest, hash_fn),
            left=left,
            right=right,
        )


Node = Union[Leaf, Inner]


def iter_leaves(node: Node) -> Iterator[Leaf]:
    """
    Yield the distinct leaves under a node in left-to-right order.

    The right child of a self-duplicated pair is skipped so every
    source leaf is yielded exactly once.
    """
    if isinstance(node, Leaf):
        yield node
        return
    yield from iter_leaves(node.left)
    if not node.is_self_duplicated:
        yield from iter_leaves(node.right)


def node_height(node: Node) -> int:
    """Number of edges from a node down to its leaves."""
    height = 0
    while isinstance(node, Inner):
        node = node.left
        height += 1
    return height


__all__ = [
    "Leaf",
    "Inner",
    "Node",
    "iter_leaves",
    "node_height",
]
