"""
CLI command modules.
"""

from merkletree_cli.commands import proof, tree, verify

__all__ = ["proof", "tree", "verify"]
