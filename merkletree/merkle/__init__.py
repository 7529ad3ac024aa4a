"""
Merkle tree construction, proof generation and proof verification.

This package provides:
- MerkleTree: immutable tree over pre-hashed leaves
- build_layers / hash_pair / promote_lonely_node: construction rules
- generate_proof / verify_proof / pair_index: proof rules
- MerkleProver / MerkleVerifier: stateless convenience wrappers

Combination Rules:
1. Standard parent: H(left + right); lonely node promoted unchanged
2. Bitcoin parent: rev(H(H(rev(left) + rev(right)))); lonely node paired
   with itself
3. Empty tree: root = b""
4. Single leaf: root = leaf
"""
from .tree_builder import (
    EMPTY_ROOT,
    Layer,
    Layers,
    hash_pair,
    promote_lonely_node,
    build_next_layer,
    build_layers,
    root_of,
)
from .proof_engine import (
    is_right_node,
    sibling_position,
    pair_index,
    resolve_leaf_index,
    generate_proof,
    verify_proof,
)
from .merkle_tree import MerkleTree
from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MerkleTree",
    "EMPTY_ROOT",
    "Layer",
    "Layers",
    # Construction
    "hash_pair",
    "promote_lonely_node",
    "build_next_layer",
    "build_layers",
    "root_of",
    # Proofs
    "is_right_node",
    "sibling_position",
    "pair_index",
    "resolve_leaf_index",
    "generate_proof",
    "verify_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
