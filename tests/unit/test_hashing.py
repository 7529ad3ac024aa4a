"""
Hashing Unit Tests
Tests for merkletree/crypto/hashing.py

Tests:
- sha256 / sha3_256 / double_sha256 known values
- hash function registry lookup
- hash_leaf text and bytes handling
- to_hex/from_hex round trip and error handling
"""
import hashlib
import pytest

from merkletree.crypto.hashing import (
    HASH_FUNCTIONS,
    double_sha256,
    from_hex,
    get_hash_function,
    hash_leaf,
    sha256,
    sha3_256,
    to_hex,
)
from merkletree.schemas.errors import (
    ConfigurationException,
    ErrorCodes,
    HexDecodingException,
)


class TestSha256:
    """Tests for sha256() function."""

    def test_sha256_known_value(self):
        """Test sha256 produces correct hash for known input."""
        result = sha256(b"hello")

        assert result.hex() == "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
        assert len(result) == 32

    def test_sha256_empty_bytes(self):
        assert sha256(b"") == hashlib.sha256(b"").digest()

    def test_sha256_different_inputs_different_outputs(self):
        assert sha256(b"input1") != sha256(b"input2")


class TestSha3:
    """Tests for sha3_256()."""

    def test_matches_hashlib(self):
        assert sha3_256(b"a") == hashlib.sha3_256(b"a").digest()

    def test_differs_from_sha256(self):
        assert sha3_256(b"a") != sha256(b"a")


class TestDoubleSha256:
    """Tests for double_sha256()."""

    def test_is_sha256_applied_twice(self):
        data = b"bitcoin"
        assert double_sha256(data) == hashlib.sha256(hashlib.sha256(data).digest()).digest()


class TestGetHashFunction:
    """Tests for the hash function registry."""

    def test_known_names(self):
        assert get_hash_function("sha256") is sha256
        assert get_hash_function("sha3_256") is sha3_256

    def test_names_are_normalized(self):
        """Case and dash/underscore differences are ignored."""
        assert get_hash_function("SHA3-256") is sha3_256
        assert get_hash_function(" Sha256 ") is sha256

    @pytest.mark.parametrize("name", sorted(HASH_FUNCTIONS))
    def test_registered_functions_match_hashlib(self, name):
        fn = get_hash_function(name)
        assert fn(b"abc") == hashlib.new(name, b"abc").digest()

    def test_unknown_name_raises(self):
        with pytest.raises(ConfigurationException) as exc_info:
            get_hash_function("keccak-512-ultra")

        assert exc_info.value.code == ErrorCodes.CONFIG_INVALID
        assert "sha256" in exc_info.value.details["available"]


class TestHashLeaf:
    """Tests for hash_leaf()."""

    def test_text_is_utf8_encoded(self):
        assert hash_leaf("a", sha3_256) == sha3_256(b"a")
        assert hash_leaf("é") == sha256("é".encode("utf-8"))

    def test_bytes_hashed_directly(self):
        assert hash_leaf(b"\x00\x01") == sha256(b"\x00\x01")

    def test_default_is_sha256(self):
        assert hash_leaf("x") == sha256(b"x")


class TestHexConversion:
    """Tests for to_hex() and from_hex()."""

    def test_to_hex_has_prefix(self):
        assert to_hex(bytes.fromhex("deadbeef")) == "0xdeadbeef"

    def test_to_hex_empty(self):
        assert to_hex(b"") == "0x"

    def test_from_hex_with_and_without_prefix(self):
        assert from_hex("0xdeadbeef") == bytes.fromhex("deadbeef")
        assert from_hex("DEADBEEF") == bytes.fromhex("deadbeef")

    def test_from_hex_empty(self):
        assert from_hex("0x") == b""
        assert from_hex("") == b""

    def test_round_trip(self):
        data = sha256(b"round trip")
        assert from_hex(to_hex(data)) == data

    def test_from_hex_invalid_characters(self):
        with pytest.raises(HexDecodingException):
            from_hex("0xzz")

    def test_from_hex_odd_length(self):
        with pytest.raises(HexDecodingException, match="even"):
            from_hex("0xabc")

    def test_hex_error_is_value_error(self):
        """HexDecodingException can be caught as ValueError."""
        with pytest.raises(ValueError):
            from_hex("not hex")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
