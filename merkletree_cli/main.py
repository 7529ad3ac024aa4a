"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m merkletree_cli root <leaf>... [--hash ALGO] [--leaf-hash ALGO] [--hex-leaves] [--bitcoin] [--json]
    python -m merkletree_cli layers <leaf>... [--tree] [--json]
    python -m merkletree_cli proof <leaf>... (--leaf VALUE | --index N) [--json]
    python -m merkletree_cli verify --proof PATH [--target HEX] [--root HEX] [--json]
    python -m merkletree_cli config --init | --show

Environment Variables:
    MERKLETREE_HASH_ALGORITHM       Hash for internal nodes (default: sha256)
    MERKLETREE_LEAF_HASH_ALGORITHM  Hash for raw leaf data (default: sha3_256)
    MERKLETREE_BITCOIN_MODE         Build Bitcoin-style trees (default: false)
    MERKLETREE_LOG_LEVEL            Log level (default: WARNING)
    MERKLETREE_LOG_FILE             Also write logs to this file
    MERKLETREE_OUTPUT_FORMAT        human or json (default: human)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from merkletree import __version__
from merkletree.crypto.hashing import HASH_FUNCTIONS
from merkletree_cli.commands import proof, tree, verify
from merkletree_cli.config import (
    DEFAULT_CONFIG_FILENAME,
    get_default_config_template,
    load_config,
)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_hash_options(parser: argparse.ArgumentParser, leaves: bool = True) -> None:
    algorithms = sorted(HASH_FUNCTIONS)
    parser.add_argument(
        "--hash",
        type=str,
        default=None,
        choices=algorithms,
        help="Hash function for internal nodes (default: from config, sha256)",
    )
    parser.add_argument(
        "--bitcoin",
        dest="bitcoin",
        action="store_true",
        default=None,
        help="Use Bitcoin rules: byte-reversed, double-hashed nodes; lonely nodes paired with themselves",
    )
    parser.add_argument(
        "--no-bitcoin",
        dest="bitcoin",
        action="store_false",
        help="Use standard rules (lonely nodes promoted unchanged)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Show tracebacks on errors",
    )
    if not leaves:
        return

    parser.add_argument(
        "leaves",
        nargs="*",
        help="Leaf values (raw data, hashed with --leaf-hash unless --hex-leaves)",
    )
    parser.add_argument(
        "--leaves-file",
        type=str,
        default=None,
        help="File with one leaf value per line (appended after positional leaves)",
    )
    parser.add_argument(
        "--leaf-hash",
        type=str,
        default=None,
        choices=algorithms,
        help="Hash function applied to raw leaf data (default: from config, sha3_256)",
    )
    parser.add_argument(
        "--hex-leaves",
        action="store_true",
        default=False,
        help="Leaf values are already-hashed hex strings",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merkletree",
        description="Build Merkle trees, generate inclusion proofs and verify them.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help=f"Path to configuration file (default: ./{DEFAULT_CONFIG_FILENAME} or ~/.config/merkletree/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Print the Merkle root of a list of leaves",
    )
    _add_hash_options(root_parser)
    root_parser.set_defaults(func=tree.root_cmd)

    # --- layers command ---
    layers_parser = subparsers.add_parser(
        "layers",
        help="Print every layer of the tree",
    )
    _add_hash_options(layers_parser)
    layers_parser.add_argument(
        "--tree",
        action="store_true",
        default=False,
        help="Also print an indented rendering of the tree",
    )
    layers_parser.set_defaults(func=tree.layers_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Generate an inclusion proof for one leaf",
        description="Generate an inclusion proof. Use --index when leaves contain duplicates.",
    )
    _add_hash_options(proof_parser)
    proof_parser.add_argument(
        "--leaf",
        type=str,
        default=None,
        help="Leaf to prove, in the same form as the leaves",
    )
    proof_parser.add_argument(
        "--index",
        type=int,
        default=None,
        help="Index of the leaf to prove",
    )
    proof_parser.set_defaults(func=proof.proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an inclusion proof",
        description="Verify a proof against a target leaf hash and a root.",
    )
    _add_hash_options(verify_parser, leaves=False)
    verify_parser.add_argument(
        "--proof", "-p",
        type=str,
        required=True,
        help="Proof JSON file ('-' for stdin)",
    )
    verify_parser.add_argument(
        "--target",
        type=str,
        default=None,
        help="Hex hash of the leaf being proved (default: from proof file)",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Hex Merkle root (default: from proof file)",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default=DEFAULT_CONFIG_FILENAME,
        help=f"Path for config file (default: {DEFAULT_CONFIG_FILENAME})",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (MERKLETREE_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: merkletree config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed / no proof)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
