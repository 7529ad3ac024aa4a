"""
merkletree - Merkle trees over pre-hashed leaves, with inclusion proofs
and optional Bitcoin-compatible construction.

Usage:
    from merkletree import MerkleTree
    from merkletree.crypto import sha256, sha3_256, hash_leaf

    leaves = [hash_leaf(x, sha3_256) for x in ["a", "b", "c"]]
    tree = MerkleTree(leaves, hash_fn=sha256)
    proof = tree.get_proof(leaves[1])
    assert tree.verify(proof, leaves[1], tree.root)
"""

__version__ = "0.1.0"

# schemas must load before crypto: crypto.hashing imports schemas.errors
from merkletree.schemas import (
    MerkleTreeException,
    MerkleProof,
    ProofPosition,
    ProofStep,
)
from merkletree.merkle import (
    MerkleTree,
    MerkleProver,
    MerkleVerifier,
)

__all__ = [
    "__version__",
    "MerkleTree",
    "MerkleProof",
    "ProofPosition",
    "ProofStep",
    "MerkleProver",
    "MerkleVerifier",
    "MerkleTreeException",
]
