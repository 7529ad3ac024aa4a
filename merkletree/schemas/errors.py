"""
Error taxonomy for the merkletree package.

Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Note that the tree itself reports "no root", "no proof" and "not verified"
through empty values and False, never through these exceptions. The
exceptions below are reserved for programming errors (a missing hash
function, a leaf of the wrong type) and for malformed external input
(bad hex, a malformed serialized proof, a bad config file).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Construction Errors
    HASH_FUNCTION_INVALID = "HASH_FUNCTION_INVALID"
    LEAF_TYPE_INVALID = "LEAF_TYPE_INVALID"

    # Encoding Errors
    HEX_DECODING_ERROR = "HEX_DECODING_ERROR"
    PROOF_FORMAT_INVALID = "PROOF_FORMAT_INVALID"

    # Verification Errors
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"
    ROOT_MISMATCH = "ROOT_MISMATCH"

    # Configuration Errors
    CONFIG_INVALID = "CONFIG_INVALID"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class MerkleTreeError(BaseModel):
    """
    Base error model for structured error communication.

    Used where errors are reported rather than raised, e.g. in the JSON
    output of the command-line interface.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.HASH_FUNCTION_INVALID],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )

    def to_exception(self) -> "MerkleTreeException":
        """Convert this error model to a raisable exception."""
        return MerkleTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleTreeException(Exception):
    """
    Base exception for all merkletree errors.

    Carries structured error information and can be converted
    to/from MerkleTreeError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLETREE_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> MerkleTreeError:
        """Convert this exception to a MerkleTreeError model."""
        return MerkleTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class HashFunctionException(MerkleTreeException):
    """Raised when the hash function is missing, not callable, or returns non-bytes."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.HASH_FUNCTION_INVALID,
            details=details,
        )


class LeafTypeException(MerkleTreeException):
    """Raised when a leaf is not a bytes-like value."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.LEAF_TYPE_INVALID,
            details=full_details,
        )


class HexDecodingException(MerkleTreeException, ValueError):
    """Raised when a string cannot be decoded as hex."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.HEX_DECODING_ERROR,
            details=details,
        )


class ProofFormatException(MerkleTreeException):
    """Raised when a serialized proof cannot be parsed."""

    def __init__(
        self,
        message: str,
        step_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if step_index is not None:
            full_details["step_index"] = step_index
        super().__init__(
            message=message,
            code=ErrorCodes.PROOF_FORMAT_INVALID,
            details=full_details,
        )


class ConfigurationException(MerkleTreeException):
    """Raised for unknown hash algorithms or unreadable configuration."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_INVALID,
            details=details,
        )


__all__ = [
    "ErrorCodes",
    "MerkleTreeError",
    "MerkleTreeException",
    "HashFunctionException",
    "LeafTypeException",
    "HexDecodingException",
    "ProofFormatException",
    "ConfigurationException",
]
