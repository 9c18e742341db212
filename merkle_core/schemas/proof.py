"""
Schemas & Serialization
File: proof.py

Purpose: Transport schemas for inclusion proofs.
A proof is the only artifact meant to cross a process or storage
boundary: an ordered list of (side, digest) pairs, bottom-up.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _validate_hex_digest(value: str) -> str:
    if not value.startswith("0x"):
        raise ValueError("digest must be a hex string with 0x prefix")
    body = value[2:]
    if len(body) % 2 != 0:
        raise ValueError("digest hex must have even length")
    # Raises ValueError on invalid characters
    bytes.fromhex(body)
    return value.lower()


class SiblingHashRecord(BaseModel):
    """One proof element: a sibling digest and its side relative to the path."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    side: Literal["left", "right"] = Field(
        ...,
        description="Position of the sibling relative to the node on the proof path",
    )
    digest: str = Field(
        ...,
        description="Sibling digest as 0x-prefixed hex",
    )

    @field_validator("digest")
    @classmethod
    def check_digest(cls, v: str) -> str:
        return _validate_hex_digest(v)

    @property
    def digest_bytes(self) -> bytes:
        return bytes.fromhex(self.digest[2:])


class ProofEnvelope(BaseModel):
    """
    Serializable inclusion proof.

    Siblings are ordered from the leaf's own level up to the level
    directly below the root.
    """

    model_config = ConfigDict(extra="forbid")

    algorithm: str = Field(
        default="sha256",
        description="Name of the hash algorithm the proof was built with",
        min_length=1,
    )
    root: str | None = Field(
        default=None,
        description="Root digest the proof targets (0x-prefixed hex)",
    )
    siblings: list[SiblingHashRecord] = Field(
        default_factory=list,
        description="Sibling hashes, bottom-up",
    )

    @field_validator("root")
    @classmethod
    def check_root(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _validate_hex_digest(v)

    @property
    def root_bytes(self) -> bytes | None:
        if self.root is None:
            return None
        return bytes.fromhex(self.root[2:])

    @property
    def depth(self) -> int:
        """Number of levels between the leaf and the root."""
        return len(self.siblings)
