"""
Merkle Tree

The MerkleTree class owns an immutable tree built once from pre-hashed
leaves, and answers root, proof and verification queries against it.

Usage:
    from merkletree import MerkleTree
    from merkletree.crypto import sha256, sha3_256, hash_leaf

    leaves = [hash_leaf(x, sha3_256) for x in ["a", "b", "c"]]
    tree = MerkleTree(leaves, hash_fn=sha256)

    proof = tree.get_proof(leaves[1])
    assert tree.verify(proof, leaves[1], tree.root)
"""
from __future__ import annotations

import logging
from typing import Sequence

from merkletree.crypto.hashing import HashFunction, from_hex, to_hex
from merkletree.schemas.proof import MerkleProof, ProofStep
from .proof_engine import generate_proof, resolve_leaf_index, verify_proof
from .tree_builder import Layer, Layers, build_layers, root_of


logger = logging.getLogger(__name__)


def _as_bytes(value: bytes | str) -> bytes:
    if isinstance(value, str):
        return from_hex(value)
    return bytes(value)


class MerkleTree:
    """
    A Merkle tree over pre-hashed leaves.

    Lonely nodes at the end of odd layers are promoted to the next layer
    without being hashed again, unless ``is_bitcoin_tree`` is set, in
    which case they are combined with themselves and every combination
    is byte-reversed and double hashed, replicating Bitcoin block trees.

    Attributes are read-only; ``leaves`` and ``layers`` are tuples.

    Example:
        >>> tree = MerkleTree([sha256(b"a"), sha256(b"b")], hash_fn=sha256)
        >>> len(tree.layers)
        2
    """

    def __init__(
        self,
        leaves: Sequence[bytes],
        hash_fn: HashFunction,
        is_bitcoin_tree: bool = False,
    ) -> None:
        """
        Build the tree.

        Args:
            leaves: Hashed leaves, each bytes-like
            hash_fn: Hash function for internal nodes
            is_bitcoin_tree: Use Bitcoin combination rules

        Raises:
            HashFunctionException: If hash_fn is missing or not callable
            LeafTypeException: If a leaf is not bytes-like
        """
        self._hash_fn = hash_fn
        self._is_bitcoin_tree = bool(is_bitcoin_tree)
        self._layers: Layers = build_layers(leaves, hash_fn, self._is_bitcoin_tree)

    @property
    def hash_fn(self) -> HashFunction:
        return self._hash_fn

    @property
    def is_bitcoin_tree(self) -> bool:
        return self._is_bitcoin_tree

    @property
    def leaves(self) -> Layer:
        return self._layers[0]

    @property
    def layers(self) -> Layers:
        """All layers, leaves first and root last."""
        return self._layers

    @property
    def root(self) -> bytes:
        """The Merkle root, or b"" for a tree without leaves."""
        return root_of(self._layers)

    @property
    def hex_root(self) -> str:
        return to_hex(self.root)

    @property
    def hex_leaves(self) -> list[str]:
        return [to_hex(leaf) for leaf in self.leaves]

    @property
    def hex_layers(self) -> list[list[str]]:
        return [[to_hex(node) for node in layer] for layer in self._layers]

    @property
    def leaf_count(self) -> int:
        return len(self.leaves)

    @property
    def depth(self) -> int:
        """Number of layers above the leaves."""
        return len(self._layers) - 1

    def __len__(self) -> int:
        return self.leaf_count

    def get_leaf_index(self, leaf: bytes | str) -> int:
        """First index of ``leaf`` (bytes or hex), or -1 if absent."""
        return resolve_leaf_index(self.leaves, leaf=_as_bytes(leaf))

    def get_proof(self, leaf: bytes | str, index: int | None = None) -> MerkleProof:
        """
        Return the inclusion proof for a leaf.

        Args:
            leaf: Target leaf (bytes or hex string)
            index: Position of the leaf; use when leaves contain duplicates

        Returns:
            MerkleProof; empty if the leaf cannot be found or ``index``
            is out of range

        Example:
            >>> tree = MerkleTree(leaves, hash_fn=sha3_256)  # leaves of a, b, a
            >>> proof = tree.get_proof(leaves[2], index=2)
        """
        leaf_index = resolve_leaf_index(self.leaves, leaf=_as_bytes(leaf), index=index)
        if leaf_index < 0:
            logger.debug("No proof: leaf not found (index=%s)", index)
            return MerkleProof()
        return generate_proof(self._layers, leaf_index, self._is_bitcoin_tree)

    def get_hex_proof(self, leaf: bytes | str, index: int | None = None) -> list[str]:
        """Proof sibling hashes as 0x-prefixed hex strings."""
        return self.get_proof(leaf, index).to_hex_list()

    def verify(
        self,
        proof: MerkleProof | Sequence[ProofStep],
        target_node: bytes | str,
        root: bytes | str,
    ) -> bool:
        """
        Return True if the proof connects ``target_node`` to ``root``.

        Uses this tree's hash function and mode, not its contents, so any
        proof built under the same rules can be checked.

        Example:
            >>> proof = tree.get_proof(leaves[2])
            >>> tree.verify(proof, leaves[2], tree.root)
            True
        """
        return verify_proof(
            proof,
            _as_bytes(target_node),
            _as_bytes(root),
            self._hash_fn,
            self._is_bitcoin_tree,
        )

    def __str__(self) -> str:
        """Render the tree root first, one indented line per node."""
        if not self.leaves:
            return ""

        lines: list[str] = []

        def _render(layer_index: int, node_index: int, indent: int) -> None:
            node = self._layers[layer_index][node_index]
            lines.append(("  " * indent) + "└─ " + node.hex())
            if layer_index == 0:
                return
            below = self._layers[layer_index - 1]
            for child in (2 * node_index, 2 * node_index + 1):
                if child < len(below):
                    _render(layer_index - 1, child, indent + 1)

        _render(len(self._layers) - 1, 0, 0)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"MerkleTree(leaves={self.leaf_count}, depth={self.depth}, "
            f"is_bitcoin_tree={self._is_bitcoin_tree}, root={self.hex_root})"
        )


__all__ = ["MerkleTree"]
