"""
Shared argument handling for CLI commands.

Turns parsed arguments plus the loaded CLIConfig into hash functions,
leaves and trees.
"""

from __future__ import annotations

import logging
from argparse import Namespace
from dataclasses import dataclass
from pathlib import Path

from merkletree.crypto.hashing import HashFunction, from_hex, get_hash_function, hash_leaf
from merkletree.merkle import MerkleTree
from merkletree_cli.config import CLIConfig


logger = logging.getLogger(__name__)


@dataclass
class TreeOptions:
    """Hashing options resolved from arguments and configuration."""
    hash_name: str
    leaf_hash_name: str
    hash_fn: HashFunction
    leaf_hash_fn: HashFunction
    bitcoin: bool
    hex_leaves: bool


def resolve_options(args: Namespace) -> TreeOptions:
    """Command-line flags win over configuration values."""
    config: CLIConfig = getattr(args, "cli_config", None) or CLIConfig()

    hash_name = getattr(args, "hash", None) or config.hash_algorithm
    leaf_hash_name = getattr(args, "leaf_hash", None) or config.leaf_hash_algorithm
    bitcoin = getattr(args, "bitcoin", None)
    if bitcoin is None:
        bitcoin = config.bitcoin_mode

    return TreeOptions(
        hash_name=hash_name,
        leaf_hash_name=leaf_hash_name,
        hash_fn=get_hash_function(hash_name),
        leaf_hash_fn=get_hash_function(leaf_hash_name),
        bitcoin=bool(bitcoin),
        hex_leaves=bool(getattr(args, "hex_leaves", False)),
    )


def to_leaf(value: str, options: TreeOptions) -> bytes:
    """A leaf from its command-line form: hex hash or raw data to be hashed."""
    if options.hex_leaves:
        return from_hex(value.strip())
    return hash_leaf(value, options.leaf_hash_fn)


def read_leaf_values(args: Namespace) -> list[str]:
    """Leaf values from positional arguments followed by --leaves-file lines."""
    values = list(getattr(args, "leaves", None) or [])
    leaves_file = getattr(args, "leaves_file", None)
    if leaves_file:
        text = Path(leaves_file).read_text(encoding="utf-8")
        values.extend(line for line in text.splitlines() if line.strip())
    return values


def build_tree(args: Namespace) -> tuple[MerkleTree, TreeOptions]:
    """Build the tree described by the command-line arguments."""
    options = resolve_options(args)
    leaves = [to_leaf(v, options) for v in read_leaf_values(args)]
    logger.info(
        "Building tree: %d leaves, hash=%s, leaf_hash=%s, bitcoin=%s",
        len(leaves), options.hash_name,
        "(hex input)" if options.hex_leaves else options.leaf_hash_name,
        options.bitcoin,
    )
    return MerkleTree(leaves, hash_fn=options.hash_fn, is_bitcoin_tree=options.bitcoin), options


def output_json(args: Namespace) -> bool:
    """--json flag, falling back to the configured default output format."""
    if getattr(args, "json", False):
        return True
    config: CLIConfig | None = getattr(args, "cli_config", None)
    return config is not None and config.default_output_format == "json"


__all__ = [
    "TreeOptions",
    "resolve_options",
    "to_leaf",
    "read_leaf_values",
    "build_tree",
    "output_json",
]
