"""
Merkle Tree Construction

Builds every layer of a Merkle tree, from the caller's pre-hashed leaves
up to the root.

Combination Rules:
1. Standard: parent = H(left + right)
2. Bitcoin:  parent = rev(H(H(rev(left) + rev(right))))
3. Odd layer, standard: the lonely last node is promoted unchanged
4. Odd layer, Bitcoin: the lonely last node is paired with itself
5. Empty leaves: layers = [[]], root = b""
6. Single leaf: layers = [[leaf]], root = leaf (nothing is hashed)

Bitcoin mode reproduces the block Merkle root of the Bitcoin protocol when
fed transaction ids in their usual (byte-reversed) display order with
sha256 as the hash function.
"""
from __future__ import annotations

import logging
from typing import Sequence

from merkletree.crypto.buffers import buffer_concat, buffer_reverse
from merkletree.crypto.hashing import HashFunction
from merkletree.schemas.errors import HashFunctionException, LeafTypeException


logger = logging.getLogger(__name__)

Layer = tuple[bytes, ...]
Layers = tuple[Layer, ...]

EMPTY_ROOT: bytes = b""


def apply_hash(hash_fn: HashFunction, data: bytes) -> bytes:
    """Apply a caller-supplied hash function, insisting on a bytes-like result."""
    result = hash_fn(data)
    if isinstance(result, bytes):
        return result
    if isinstance(result, (bytearray, memoryview)):
        return bytes(result)
    raise HashFunctionException(
        f"Hash function must return bytes, got {type(result).__name__}",
        details={"hash_fn": getattr(hash_fn, "__name__", repr(hash_fn))},
    )


def hash_pair(
    left: bytes,
    right: bytes,
    hash_fn: HashFunction,
    is_bitcoin_tree: bool = False,
) -> bytes:
    """
    Compute the parent hash of two child nodes.

    Args:
        left: Left child hash
        right: Right child hash
        hash_fn: Hash function applied to the concatenation
        is_bitcoin_tree: Reverse inputs and output and hash twice

    Returns:
        Parent hash
    """
    if not is_bitcoin_tree:
        return apply_hash(hash_fn, buffer_concat(left, right))

    data = buffer_concat(buffer_reverse(left), buffer_reverse(right))
    return buffer_reverse(apply_hash(hash_fn, apply_hash(hash_fn, data)))


def promote_lonely_node(
    node: bytes,
    hash_fn: HashFunction,
    is_bitcoin_tree: bool = False,
) -> bytes:
    """
    Value carried up for the unpaired last node of an odd layer.

    Standard trees carry it up unchanged; Bitcoin trees pair it with itself.
    """
    if is_bitcoin_tree:
        return hash_pair(node, node, hash_fn, is_bitcoin_tree=True)
    return node


def build_next_layer(
    nodes: Sequence[bytes],
    hash_fn: HashFunction,
    is_bitcoin_tree: bool = False,
) -> Layer:
    """Combine one layer pairwise into the layer above it."""
    next_layer: list[bytes] = []

    for i in range(0, len(nodes) - 1, 2):
        next_layer.append(hash_pair(nodes[i], nodes[i + 1], hash_fn, is_bitcoin_tree))

    if len(nodes) % 2 == 1:
        next_layer.append(promote_lonely_node(nodes[-1], hash_fn, is_bitcoin_tree))

    return tuple(next_layer)


def normalize_leaves(leaves: Sequence[bytes]) -> Layer:
    """
    Copy leaves into an immutable tuple of bytes.

    Raises:
        LeafTypeException: If a leaf is not bytes, bytearray or memoryview
    """
    normalized: list[bytes] = []
    for i, leaf in enumerate(leaves):
        if isinstance(leaf, bytes):
            normalized.append(leaf)
        elif isinstance(leaf, (bytearray, memoryview)):
            normalized.append(bytes(leaf))
        else:
            raise LeafTypeException(
                f"Leaf {i} must be bytes, got {type(leaf).__name__}; "
                f"hash raw data before building the tree",
                leaf_index=i,
            )
    return tuple(normalized)


def build_layers(
    leaves: Sequence[bytes],
    hash_fn: HashFunction,
    is_bitcoin_tree: bool = False,
) -> Layers:
    """
    Build all layers of a Merkle tree.

    Layer 0 is the leaves; each following layer has
    ceil(previous / 2) nodes; the last layer holds the root (or nothing
    when there are no leaves).

    Args:
        leaves: Pre-hashed leaf values. Order matters and is preserved.
        hash_fn: Hash function used for internal nodes
        is_bitcoin_tree: Use the Bitcoin combination rules

    Returns:
        Tuple of layers, leaves first

    Raises:
        HashFunctionException: If hash_fn is missing or not callable
        LeafTypeException: If a leaf is not bytes-like

    Example:
        >>> layers = build_layers([a, b, c], sha256)
        >>> layers[1] == (sha256(a + b), c)
        True
    """
    if hash_fn is None or not callable(hash_fn):
        raise HashFunctionException(
            f"A callable hash function is required, got {type(hash_fn).__name__}",
        )

    current = normalize_leaves(leaves)
    layers: list[Layer] = [current]

    while len(current) > 1:
        current = build_next_layer(current, hash_fn, is_bitcoin_tree)
        layers.append(current)

    logger.debug(
        "Built Merkle tree: %d leaves, %d layers, bitcoin=%s",
        len(layers[0]), len(layers), is_bitcoin_tree,
    )
    return tuple(layers)


def root_of(layers: Layers) -> bytes:
    """Root of a built tree, or b"" when the tree has no leaves."""
    if not layers or not layers[-1]:
        return EMPTY_ROOT
    return layers[-1][0]


__all__ = [
    "Layer",
    "Layers",
    "EMPTY_ROOT",
    "apply_hash",
    "hash_pair",
    "promote_lonely_node",
    "build_next_layer",
    "normalize_leaves",
    "build_layers",
    "root_of",
]
