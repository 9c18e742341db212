"""
Runtime Configuration Module

Provides configuration loading and logging setup for the Merkle core.
"""

from .runtime import ENV_PREFIX, MerkleConfig, setup_logging

__all__ = [
    "ENV_PREFIX",
    "MerkleConfig",
    "setup_logging",
]
