"""
Pytest configuration and shared fixtures for merkletree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used leaf and hash fixtures
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from merkletree.crypto.hashing import hash_leaf, sha256, sha3_256  # noqa: E402


# =============================================================================
# Factory Functions
# =============================================================================

def make_leaves(values, hash_fn=sha3_256):
    """Hash raw values into leaves."""
    return [hash_leaf(v, hash_fn) for v in values]


def make_numbered_leaves(count, hash_fn=sha256):
    """Leaves for b"leaf0", b"leaf1", ..."""
    return [hash_fn(f"leaf{i}".encode()) for i in range(count)]


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def abc_leaves():
    """SHA3-256 leaves of "a", "b", "c"."""
    return make_leaves(["a", "b", "c"])


@pytest.fixture
def aba_leaves():
    """SHA3-256 leaves of "a", "b", "a" (duplicate values)."""
    return make_leaves(["a", "b", "a"])


@pytest.fixture
def numbered_leaves():
    """Factory fixture: numbered_leaves(n) -> n sha256 leaves."""
    return make_numbered_leaves


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run with no MERKLETREE_* variables, from an empty working directory."""
    import os

    for key in list(os.environ):
        if key.startswith("MERKLETREE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path
