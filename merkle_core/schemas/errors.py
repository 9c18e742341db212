"""
Schemas & Serialization
File: errors.py

Purpose: Standard error taxonomy for the Merkle core.
Defines both a Pydantic model for structured error reporting
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the Merkle core."""

    # Construction Errors
    EMPTY_INPUT = "EMPTY_INPUT"
    REBUILD_FAILED = "REBUILD_FAILED"

    # Serialization Errors
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"
    PROOF_DECODE_ERROR = "PROOF_DECODE_ERROR"

    # Hashing Errors
    UNSUPPORTED_HASH_ALGORITHM = "UNSUPPORTED_HASH_ALGORITHM"

    # Configuration Errors
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class MerkleError(BaseModel):
    """
    Error model for structured error reporting.

    Lets callers pass or serialize failures without raising.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.EMPTY_INPUT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "MerkleException":
        """Convert this error model to a raisable exception."""
        return MerkleException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleException(Exception):
    """
    Base exception for all Merkle core errors.

    Carries structured error information and can be converted
    to a MerkleError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> MerkleError:
        """Convert this exception to a MerkleError model."""
        return MerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputException(MerkleException):
    """Exception raised when a tree is built from zero leaves."""

    def __init__(
        self,
        message: str = "Cannot build a Merkle tree without leaves",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
            retryable=False,
        )


class RebuildFailedException(MerkleException):
    """Exception raised when rebuilding a tree after an append fails."""

    def __init__(
        self,
        message: str,
        leaf_count: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_count is not None:
            full_details["leaf_count"] = leaf_count
        super().__init__(
            message=message,
            code=ErrorCodes.REBUILD_FAILED,
            details=full_details,
            retryable=False,
        )


class CanonicalizationException(MerkleException):
    """Exception raised when an item cannot be serialized canonically."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class UnsupportedHashAlgorithmException(MerkleException):
    """Exception raised when a hash algorithm name cannot be resolved."""

    def __init__(
        self,
        message: str,
        algorithm: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if algorithm:
            full_details["algorithm"] = algorithm
        super().__init__(
            message=message,
            code=ErrorCodes.UNSUPPORTED_HASH_ALGORITHM,
            details=full_details,
            retryable=False,
        )


class ProofDecodeException(MerkleException):
    """Exception raised when a transported proof cannot be decoded."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.PROOF_DECODE_ERROR,
            details=details,
            retryable=False,
        )


class ConfigurationException(MerkleException):
    """Exception raised when runtime configuration is invalid."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=full_details,
            retryable=False,
        )
