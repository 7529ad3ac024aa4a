"""
CLI Proof Command

Build a tree and print the inclusion proof for one leaf. The JSON output
can be fed straight back into `merkletree verify --proof`.

Usage:
    merkletree proof a b c --leaf b [--json]
    merkletree proof a b a --index 2 [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from typing import Any

from merkletree.crypto.hashing import to_hex
from merkletree_cli.inputs import build_tree, output_json, to_leaf


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_NO_PROOF = 2


def proof_cmd(args: Namespace) -> int:
    """
    Execute the proof command.

    Returns:
        Exit code (2 when no proof exists for the requested leaf)
    """
    if args.leaf is None and args.index is None:
        print("Error: one of --leaf or --index is required", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    tree, options = build_tree(args)

    if args.leaf is not None:
        leaf = to_leaf(args.leaf, options)
    elif 0 <= args.index < tree.leaf_count:
        leaf = tree.leaves[args.index]
    else:
        leaf = b""

    index = args.index if args.index is not None else tree.get_leaf_index(leaf)
    proof = tree.get_proof(leaf, index=args.index)

    result: dict[str, Any] = {
        "leaf": to_hex(leaf),
        "leaf_index": index,
        "root": tree.hex_root,
        "hash": options.hash_name,
        "bitcoin": options.bitcoin,
        "proof": proof.to_dict(),
    }

    if output_json(args):
        print(json.dumps(result, indent=2))
    elif proof.is_empty:
        print("no proof")
    else:
        print(f"leaf: {result['leaf']} (index {index})")
        print(f"root: {result['root']}")
        for i, step in enumerate(proof.steps):
            print(f"  {i}: {step.position.value:<5} {to_hex(step.data)}")

    if proof.is_empty:
        logger.info("No proof available for leaf %s", to_hex(leaf))
        return EXIT_NO_PROOF
    return EXIT_SUCCESS
