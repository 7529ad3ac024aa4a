"""
Proof Engine Unit Tests
Tests for merkletree/merkle/proof_engine.py

Tests:
1. Pairing pure functions (pair_index, sibling_position)
2. Leaf resolution - first match, explicit index, unresolvable
3. Proof shape for standard and Bitcoin trees, including the last leaf
4. Verification - every index verifies, tampering fails, sentinels fail
"""
import pytest

from merkletree.crypto.hashing import sha256
from merkletree.merkle.proof_engine import (
    generate_proof,
    is_right_node,
    pair_index,
    resolve_leaf_index,
    sibling_position,
    verify_proof,
)
from merkletree.merkle.tree_builder import build_layers, root_of
from merkletree.schemas.proof import MerkleProof, ProofPosition, ProofStep


def flip_byte(data: bytes, position: int = 0) -> bytes:
    buf = bytearray(data)
    buf[position] ^= 0x01
    return bytes(buf)


class TestPairing:
    """Tests for the pairing pure functions."""

    def test_is_right_node(self):
        assert not is_right_node(0)
        assert is_right_node(1)
        assert not is_right_node(4)

    def test_sibling_position(self):
        """A right node's sibling is on the left, and vice versa."""
        assert sibling_position(3) is ProofPosition.LEFT
        assert sibling_position(2) is ProofPosition.RIGHT

    def test_right_node_pairs_left(self):
        assert pair_index(1, 2) == 0
        assert pair_index(5, 6, is_bitcoin_tree=True) == 4

    def test_left_node_pairs_right(self):
        assert pair_index(0, 2) == 1
        assert pair_index(2, 4, is_bitcoin_tree=True) == 3

    def test_lonely_tail_standard_has_no_pair(self):
        assert pair_index(2, 3) is None
        assert pair_index(0, 1) is None

    def test_lonely_tail_bitcoin_pairs_with_itself(self):
        assert pair_index(2, 3, is_bitcoin_tree=True) == 2
        assert pair_index(4, 5, is_bitcoin_tree=True) == 4

    def test_root_layer_bitcoin(self):
        """Index beyond a layer has no pair in either mode."""
        assert pair_index(2, 2, is_bitcoin_tree=True) is None


class TestResolveLeafIndex:
    """Tests for resolve_leaf_index()."""

    def test_first_match(self, aba_leaves):
        assert resolve_leaf_index(aba_leaves, leaf=aba_leaves[2]) == 0

    def test_explicit_index_wins(self, aba_leaves):
        assert resolve_leaf_index(aba_leaves, leaf=aba_leaves[0], index=2) == 2

    def test_missing_leaf(self, abc_leaves):
        assert resolve_leaf_index(abc_leaves, leaf=sha256(b"zzz")) == -1

    @pytest.mark.parametrize("index", [-1, 3, 100])
    def test_out_of_range_index(self, abc_leaves, index):
        assert resolve_leaf_index(abc_leaves, leaf=abc_leaves[0], index=index) == -1

    def test_no_leaf_no_index(self, abc_leaves):
        assert resolve_leaf_index(abc_leaves) == -1

    def test_empty_leaves(self):
        assert resolve_leaf_index([], leaf=b"\x00") == -1


class TestGenerateProof:
    """Tests for generate_proof()."""

    def test_three_leaves_middle(self):
        a, b, c = (sha256(x) for x in (b"a", b"b", b"c"))
        layers = build_layers([a, b, c], sha256)

        proof = generate_proof(layers, 1)

        assert proof.steps == (
            ProofStep(position=ProofPosition.LEFT, data=a),
            ProofStep(position=ProofPosition.RIGHT, data=c),
        )

    def test_three_leaves_promoted_leaf_standard(self):
        """The promoted leaf has no sibling at the leaf layer."""
        a, b, c = (sha256(x) for x in (b"a", b"b", b"c"))
        layers = build_layers([a, b, c], sha256)

        proof = generate_proof(layers, 2)

        assert proof.steps == (ProofStep(position=ProofPosition.LEFT, data=sha256(a + b)),)

    def test_three_leaves_last_leaf_bitcoin(self):
        """The lonely last leaf is its own sibling in Bitcoin trees."""
        a, b, c = (sha256(x) for x in (b"a", b"b", b"c"))
        layers = build_layers([a, b, c], sha256, is_bitcoin_tree=True)

        proof = generate_proof(layers, 2, is_bitcoin_tree=True)

        assert proof.steps == (
            ProofStep(position=ProofPosition.RIGHT, data=c),
            ProofStep(position=ProofPosition.LEFT, data=layers[1][0]),
        )

    def test_last_leaf_even_count_bitcoin(self, numbered_leaves):
        """A last leaf that was paired normally gets an ordinary proof."""
        leaves = numbered_leaves(4)
        layers = build_layers(leaves, sha256, is_bitcoin_tree=True)

        proof = generate_proof(layers, 3, is_bitcoin_tree=True)

        assert [s.position for s in proof.steps] == [ProofPosition.LEFT, ProofPosition.LEFT]
        assert [s.data for s in proof.steps] == [leaves[2], layers[1][0]]

    def test_proof_length_is_logarithmic(self, numbered_leaves):
        layers = build_layers(numbered_leaves(16), sha256)

        for i in range(16):
            assert len(generate_proof(layers, i)) == 4

    def test_single_leaf_empty_proof(self):
        layers = build_layers([sha256(b"only")], sha256)

        assert generate_proof(layers, 0).is_empty

    def test_out_of_range_empty_proof(self, numbered_leaves):
        layers = build_layers(numbered_leaves(4), sha256)

        assert generate_proof(layers, 4).is_empty
        assert generate_proof(layers, -1).is_empty

    def test_empty_tree_empty_proof(self):
        assert generate_proof(build_layers([], sha256), 0).is_empty


class TestVerifyProof:
    """Tests for verify_proof()."""

    @pytest.mark.parametrize("bitcoin", [False, True])
    @pytest.mark.parametrize("count", [2, 3, 4, 5, 6, 7, 8, 9, 12, 13])
    def test_every_index_verifies(self, numbered_leaves, count, bitcoin):
        leaves = numbered_leaves(count)
        layers = build_layers(leaves, sha256, bitcoin)
        root = root_of(layers)

        for i, leaf in enumerate(leaves):
            proof = generate_proof(layers, i, bitcoin)
            assert verify_proof(proof, leaf, root, sha256, bitcoin), f"index {i} of {count}"

    def test_wrong_target_fails(self, numbered_leaves):
        leaves = numbered_leaves(5)
        layers = build_layers(leaves, sha256)
        proof = generate_proof(layers, 1)

        assert not verify_proof(proof, leaves[0], root_of(layers), sha256)

    @pytest.mark.parametrize("bitcoin", [False, True])
    def test_flipped_byte_in_target_fails(self, numbered_leaves, bitcoin):
        leaves = numbered_leaves(6)
        layers = build_layers(leaves, sha256, bitcoin)
        proof = generate_proof(layers, 3, bitcoin)

        for pos in (0, 15, 31):
            assert not verify_proof(proof, flip_byte(leaves[3], pos), root_of(layers), sha256, bitcoin)

    @pytest.mark.parametrize("bitcoin", [False, True])
    def test_flipped_byte_in_any_step_fails(self, numbered_leaves, bitcoin):
        leaves = numbered_leaves(7)
        layers = build_layers(leaves, sha256, bitcoin)
        root = root_of(layers)
        proof = generate_proof(layers, 4, bitcoin)

        for k, step in enumerate(proof.steps):
            steps = list(proof.steps)
            steps[k] = ProofStep(position=step.position, data=flip_byte(step.data))
            assert not verify_proof(steps, leaves[4], root, sha256, bitcoin)

    def test_swapped_position_fails(self, numbered_leaves):
        leaves = numbered_leaves(4)
        layers = build_layers(leaves, sha256)
        proof = generate_proof(layers, 0)

        flipped = [
            ProofStep(
                position=ProofPosition.LEFT if s.position is ProofPosition.RIGHT else ProofPosition.RIGHT,
                data=s.data,
            )
            for s in proof.steps
        ]
        assert not verify_proof(flipped, leaves[0], root_of(layers), sha256)

    def test_wrong_mode_fails(self, numbered_leaves):
        leaves = numbered_leaves(4)
        layers = build_layers(leaves, sha256)
        proof = generate_proof(layers, 0)

        assert not verify_proof(proof, leaves[0], root_of(layers), sha256, is_bitcoin_tree=True)

    def test_empty_proof_fails(self):
        """Even a single-leaf tree's leaf does not verify with an empty proof."""
        leaf = sha256(b"only")
        assert not verify_proof(MerkleProof(), leaf, leaf, sha256)
        assert not verify_proof([], leaf, leaf, sha256)

    def test_empty_target_or_root_fails(self, numbered_leaves):
        leaves = numbered_leaves(2)
        layers = build_layers(leaves, sha256)
        proof = generate_proof(layers, 0)

        assert not verify_proof(proof, b"", root_of(layers), sha256)
        assert not verify_proof(proof, leaves[0], b"", sha256)

    def test_root_compared_by_full_equality(self, numbered_leaves):
        """A root that only shares a prefix with the computed hash fails."""
        leaves = numbered_leaves(2)
        layers = build_layers(leaves, sha256)
        proof = generate_proof(layers, 0)
        root = root_of(layers)

        assert not verify_proof(proof, leaves[0], root[:16], sha256)
        assert not verify_proof(proof, leaves[0], root + b"\x00", sha256)

    def test_accepts_plain_step_sequence(self, numbered_leaves):
        leaves = numbered_leaves(3)
        layers = build_layers(leaves, sha256)
        steps = list(generate_proof(layers, 0).steps)

        assert verify_proof(steps, leaves[0], root_of(layers), sha256)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
