"""
Pytest configuration and shared fixtures for the Merkle core tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used trees and a readable test hash function
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from merkle_core.crypto.hashing import sha256  # noqa: E402
from merkle_core.merkle import build_tree  # noqa: E402


def tagged_hash(data: bytes) -> bytes:
    """
    Readable, deterministic test hash: H(x) = b"H(" + x + b")".

    Not collision resistant; digests spell out the tree structure,
    which makes expected roots easy to write by hand.
    """
    return b"H(" + data + b")"


def utf8(item: str) -> bytes:
    """Serializer for the tagged tree: the text itself, no type tag."""
    return item.encode("utf-8")


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def abcd_items():
    return ["A", "B", "C", "D"]


@pytest.fixture
def abcd_tree(abcd_items):
    """Four-leaf SHA-256 tree."""
    return build_tree(abcd_items, hash_fn=sha256)


@pytest.fixture
def tagged_tree(abcd_items):
    """Four-leaf tree using the readable tagged hash over raw UTF-8 text."""
    return build_tree(abcd_items, hash_fn=tagged_hash, serialize=utf8)


@pytest.fixture
def hash_fn():
    return tagged_hash
