"""
CLI Verify Command

Verify an inclusion proof offline. The proof file may be the JSON printed
by `merkletree proof --json` (leaf, root, hash and mode are then taken from
it unless overridden) or a bare proof ({"steps": [...]} or a list).

Usage:
    merkletree verify --proof proof.json
    merkletree verify --proof - --target 0x... --root 0x... [--bitcoin]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from merkletree.crypto.hashing import from_hex, get_hash_function
from merkletree.merkle import MerkleVerifier
from merkletree.schemas.errors import MerkleTreeException
from merkletree.schemas.proof import MerkleProof
from merkletree_cli.inputs import output_json, resolve_options


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    target: str = ""
    root: str = ""
    hash: str = ""
    bitcoin: bool = False
    steps: int = 0
    verified: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def read_proof_document(path: str) -> Any:
    """Read JSON from a file path, or from stdin when path is '-'."""
    if path == "-":
        return json.load(sys.stdin)
    return json.loads(Path(path).read_text(encoding="utf-8"))


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        Exit code (0=verified, 1=error, 2=not verified)
    """
    try:
        document = read_proof_document(args.proof)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error reading proof: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Output of `merkletree proof --json` wraps the proof with context
    context: dict[str, Any] = {}
    proof_data = document
    if isinstance(document, dict) and "proof" in document:
        context = document
        proof_data = document["proof"]

    target_hex = args.target or context.get("leaf")
    root_hex = args.root or context.get("root")
    if not target_hex or not root_hex:
        print("Error: --target and --root are required", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        options = resolve_options(args)
        hash_name = args.hash or context.get("hash") or options.hash_name
        bitcoin = args.bitcoin if args.bitcoin is not None else context.get("bitcoin", options.bitcoin)
        proof = MerkleProof.from_dict(proof_data)
        target = from_hex(target_hex)
        root = from_hex(root_hex)
        hash_fn = get_hash_function(hash_name)
    except MerkleTreeException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    verified = MerkleVerifier.verify(proof, target, root, hash_fn, bool(bitcoin))
    logger.info("Proof with %d steps verified=%s", len(proof), verified)

    summary = VerifySummary(
        target=target_hex,
        root=root_hex,
        hash=hash_name,
        bitcoin=bool(bitcoin),
        steps=len(proof),
        verified=verified,
    )

    if output_json(args):
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(f"verified: {str(verified).lower()}")

    return EXIT_SUCCESS if verified else EXIT_VERIFICATION_FAILED
