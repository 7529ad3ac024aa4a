"""
merkletree CLI

Command-line interface for building Merkle trees, generating inclusion
proofs and verifying them.

Usage:
    python -m merkletree_cli root a b c
    python -m merkletree_cli proof a b c --leaf b --json > proof.json
    python -m merkletree_cli verify --proof proof.json
"""
