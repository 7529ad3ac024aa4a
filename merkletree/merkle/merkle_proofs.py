"""
Merkle Proofs Convenience Wrappers

Stateless class-based interfaces for callers that hold leaves or a proof
but do not want to keep a MerkleTree around:
- MerkleProver: compute roots and proofs straight from leaves
- MerkleVerifier: check proofs given only the hash function and mode

These are thin wrappers around tree_builder and proof_engine.
"""
from __future__ import annotations

from typing import Any, Sequence

from merkletree.crypto.hashing import HashFunction, hash_leaf
from merkletree.schemas.proof import MerkleProof, ProofStep
from .proof_engine import generate_proof, resolve_leaf_index, verify_proof
from .tree_builder import build_layers, root_of


class MerkleProver:
    """
    Convenience class for computing roots and generating proofs.

    Example:
        >>> leaves = [sha256(b"a"), sha256(b"b"), sha256(b"c")]
        >>> proof = MerkleProver.prove(leaves, sha256, index=1)
        >>> len(proof)
        2
    """

    @staticmethod
    def compute_root(
        leaves: Sequence[bytes],
        hash_fn: HashFunction,
        is_bitcoin_tree: bool = False,
    ) -> bytes:
        """Merkle root of pre-hashed leaves (b"" when there are none)."""
        return root_of(build_layers(leaves, hash_fn, is_bitcoin_tree))

    @staticmethod
    def compute_root_from_data(
        data: Sequence[bytes | str],
        hash_fn: HashFunction,
        leaf_hash_fn: HashFunction | None = None,
        is_bitcoin_tree: bool = False,
    ) -> bytes:
        """
        Merkle root of raw data items.

        Each item is hashed into a leaf with ``leaf_hash_fn``
        (``hash_fn`` when not given) before the tree is built.
        """
        leaf_fn = leaf_hash_fn or hash_fn
        leaves = [hash_leaf(item, leaf_fn) for item in data]
        return MerkleProver.compute_root(leaves, hash_fn, is_bitcoin_tree)

    @staticmethod
    def prove(
        leaves: Sequence[bytes],
        hash_fn: HashFunction,
        leaf: bytes | None = None,
        index: int | None = None,
        is_bitcoin_tree: bool = False,
    ) -> MerkleProof:
        """
        Generate a proof for a leaf given by value or by index.

        Returns:
            MerkleProof, empty when the leaf cannot be resolved
        """
        layers = build_layers(leaves, hash_fn, is_bitcoin_tree)
        leaf_index = resolve_leaf_index(layers[0], leaf=leaf, index=index)
        if leaf_index < 0:
            return MerkleProof()
        return generate_proof(layers, leaf_index, is_bitcoin_tree)


class MerkleVerifier:
    """
    Convenience class for verifying proofs without the tree.

    Example:
        >>> proof = MerkleProver.prove(leaves, sha256, index=1)
        >>> MerkleVerifier.verify(proof, leaves[1], root, sha256)
        True
    """

    @staticmethod
    def verify(
        proof: MerkleProof | Sequence[ProofStep],
        target_node: bytes,
        root: bytes,
        hash_fn: HashFunction,
        is_bitcoin_tree: bool = False,
    ) -> bool:
        return verify_proof(proof, target_node, root, hash_fn, is_bitcoin_tree)

    @staticmethod
    def verify_serialized(
        data: Any,
        target_node: bytes,
        root: bytes,
        hash_fn: HashFunction,
        is_bitcoin_tree: bool = False,
    ) -> bool:
        """
        Verify a proof in its JSON form ({"steps": [...]} or a list).

        Raises:
            ProofFormatException: If the proof cannot be parsed
        """
        proof = MerkleProof.from_dict(data)
        return verify_proof(proof, target_node, root, hash_fn, is_bitcoin_tree)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
