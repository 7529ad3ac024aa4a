"""
Merkle Proof Generation and Verification

Works on the layers produced by tree_builder.build_layers; nothing here
depends on how those layers were computed.

Proof Generation:
- Resolve the leaf to an index (first byte-exact match unless an explicit
  index is given). Unresolvable leaves yield an empty proof.
- Walk from the leaf layer up to (not including) the root layer, emitting
  the sibling of the current node at each layer, then move to the parent
  (index // 2).

Sibling Pairing (pair_index):
- A right node (odd index) pairs with index - 1, sibling on the LEFT.
- A left node pairs with index + 1 when it exists, sibling on the RIGHT.
- A left node with no right neighbour is the lonely tail of an odd layer:
  standard trees promoted it unchanged, so no step is emitted; Bitcoin
  trees paired it with itself, so the node itself is emitted as a RIGHT
  sibling.

Verification:
- Replay the steps from the target node, hashing with each sibling on
  its recorded side, and compare the result with the root.
- An empty proof, target or root never verifies.
"""
from __future__ import annotations

import logging
from typing import Sequence

from merkletree.crypto.hashing import HashFunction
from merkletree.schemas.proof import MerkleProof, ProofPosition, ProofStep
from .tree_builder import Layers, hash_pair


logger = logging.getLogger(__name__)


def is_right_node(index: int) -> bool:
    return index % 2 == 1


def sibling_position(index: int) -> ProofPosition:
    """Side the sibling of the node at ``index`` sits on."""
    return ProofPosition.LEFT if is_right_node(index) else ProofPosition.RIGHT


def pair_index(index: int, layer_length: int, is_bitcoin_tree: bool = False) -> int | None:
    """
    Index of the node that ``index`` was combined with, within its layer.

    Args:
        index: Position of the node in its layer
        layer_length: Number of nodes in the layer
        is_bitcoin_tree: Lonely tail nodes pair with themselves

    Returns:
        The partner index, or None when the node was promoted unpaired
    """
    if is_right_node(index):
        return index - 1
    if index + 1 < layer_length:
        return index + 1
    if is_bitcoin_tree and index < layer_length:
        return index
    return None


def resolve_leaf_index(
    leaves: Sequence[bytes],
    leaf: bytes | None = None,
    index: int | None = None,
) -> int:
    """
    Resolve the leaf to prove to its position.

    An explicit index wins over the leaf value; it is only checked for
    range. Without one, the first leaf equal to ``leaf`` is used.

    Returns:
        Leaf index, or -1 when it cannot be resolved
    """
    if index is not None:
        if 0 <= index < len(leaves):
            return index
        return -1

    if leaf is None:
        return -1

    for i, candidate in enumerate(leaves):
        if candidate == leaf:
            return i
    return -1


def generate_proof(
    layers: Layers,
    leaf_index: int,
    is_bitcoin_tree: bool = False,
) -> MerkleProof:
    """
    Generate the inclusion proof for the leaf at ``leaf_index``.

    Args:
        layers: Layers of a built tree, leaves first
        leaf_index: Position of the leaf in layer 0
        is_bitcoin_tree: Whether the layers were built with Bitcoin rules

    Returns:
        MerkleProof ordered leaf layer first; empty when the index is out
        of range or the tree has a single leaf
    """
    if not layers or not 0 <= leaf_index < len(layers[0]):
        return MerkleProof()

    steps: list[ProofStep] = []
    index = leaf_index

    for layer in layers[:-1]:
        partner = pair_index(index, len(layer), is_bitcoin_tree)
        if partner is not None:
            steps.append(ProofStep(position=sibling_position(index), data=layer[partner]))
        index = index // 2

    return MerkleProof(steps=tuple(steps))


def verify_proof(
    proof: MerkleProof | Sequence[ProofStep],
    target_node: bytes,
    root: bytes,
    hash_fn: HashFunction,
    is_bitcoin_tree: bool = False,
) -> bool:
    """
    Check that a proof connects ``target_node`` to ``root``.

    Every step is replayed before the single final comparison; a wrong
    intermediate hash is not detected early.

    Args:
        proof: Proof steps, leaf layer first
        target_node: Leaf hash being proved
        root: Claimed Merkle root
        hash_fn: Hash function the tree was built with
        is_bitcoin_tree: Whether the tree was built with Bitcoin rules

    Returns:
        True if the recomputed root equals ``root`` byte for byte
    """
    steps = proof.steps if isinstance(proof, MerkleProof) else tuple(proof)

    if not steps or not target_node or not root:
        return False

    current = bytes(target_node)
    for step in steps:
        if step.position is ProofPosition.LEFT:
            current = hash_pair(step.data, current, hash_fn, is_bitcoin_tree)
        else:
            current = hash_pair(current, step.data, hash_fn, is_bitcoin_tree)

    if current != root:
        logger.debug(
            "Proof did not verify: computed %s, expected %s",
            current.hex(), bytes(root).hex(),
        )
        return False
    return True


__all__ = [
    "is_right_node",
    "sibling_position",
    "pair_index",
    "resolve_leaf_index",
    "generate_proof",
    "verify_proof",
]
