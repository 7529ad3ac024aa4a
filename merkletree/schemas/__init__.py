"""
Schemas: error taxonomy and proof value objects.
"""

from .errors import (
    ErrorCodes,
    MerkleTreeError,
    MerkleTreeException,
    HashFunctionException,
    LeafTypeException,
    HexDecodingException,
    ProofFormatException,
    ConfigurationException,
)
from .proof import (
    ProofPosition,
    ProofStep,
    MerkleProof,
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
    "ProofPosition",
    "ProofStep",
    "MerkleProof",
]
