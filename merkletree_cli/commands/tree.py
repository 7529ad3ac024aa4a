"""
CLI Tree Commands

Build a tree from leaves and print its root or all of its layers.

Usage:
    merkletree root a b c [--hash sha256] [--leaf-hash sha3_256] [--json]
    merkletree layers a b c [--bitcoin] [--json]
"""

from __future__ import annotations

import json
from argparse import Namespace

from merkletree_cli.inputs import build_tree, output_json


EXIT_SUCCESS = 0


def root_cmd(args: Namespace) -> int:
    """Print the Merkle root."""
    tree, options = build_tree(args)

    if output_json(args):
        print(json.dumps({
            "root": tree.hex_root,
            "leaf_count": tree.leaf_count,
            "depth": tree.depth,
            "hash": options.hash_name,
            "bitcoin": options.bitcoin,
        }, indent=2))
    else:
        print(tree.hex_root)

    return EXIT_SUCCESS


def layers_cmd(args: Namespace) -> int:
    """Print every layer of the tree, leaves first."""
    tree, options = build_tree(args)

    if output_json(args):
        print(json.dumps({
            "root": tree.hex_root,
            "layers": tree.hex_layers,
            "hash": options.hash_name,
            "bitcoin": options.bitcoin,
        }, indent=2))
        return EXIT_SUCCESS

    for i, layer in enumerate(tree.hex_layers):
        print(f"layer {i} ({len(layer)}):")
        for node in layer:
            print(f"  {node}")

    if getattr(args, "tree", False) and tree.leaf_count:
        print()
        print(tree)

    return EXIT_SUCCESS
