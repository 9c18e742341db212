"""
Hashing Unit Tests
Tests for merkle_core/crypto/hashing.py

Tests:
- sha256 stability
- hash algorithm registry
- hash_concat / hash_item
- to_hex/from_hex round trip
"""
import hashlib

import pytest

from merkle_core.crypto.hashing import (
    DEFAULT_HASH_ALGORITHM,
    from_hex,
    get_hash_function,
    hash_concat,
    hash_item,
    sha256,
    supported_algorithms,
    to_hex,
)
from merkle_core.schemas.errors import (
    CanonicalizationException,
    ErrorCodes,
    UnsupportedHashAlgorithmException,
)


class TestSha256:
    """Tests for sha256() function."""

    def test_sha256_known_value(self):
        expected = hashlib.sha256(b"hello").digest()
        result = sha256(b"hello")

        assert result == expected
        assert len(result) == 32

    def test_sha256_empty_bytes(self):
        assert sha256(b"") == hashlib.sha256(b"").digest()

    def test_sha256_deterministic(self):
        data = b"test data for hashing"

        assert sha256(data) == sha256(data)

    def test_sha256_different_inputs_different_outputs(self):
        assert sha256(b"input1") != sha256(b"input2")


class TestHashRegistry:
    """Tests for get_hash_function()."""

    def test_default_is_sha256(self):
        assert DEFAULT_HASH_ALGORITHM == "sha256"
        assert get_hash_function() is sha256

    @pytest.mark.parametrize("name", ["sha512", "sha3_256", "blake2b", "blake2s", "sha1"])
    def test_resolves_hashlib_algorithms(self, name):
        fn = get_hash_function(name)

        assert fn(b"data") == hashlib.new(name, b"data").digest()

    def test_name_normalization(self):
        fn = get_hash_function("SHA3-256")

        assert fn(b"x") == hashlib.sha3_256(b"x").digest()

    def test_unknown_algorithm_raises(self):
        with pytest.raises(UnsupportedHashAlgorithmException) as exc_info:
            get_hash_function("md6")

        assert exc_info.value.code == ErrorCodes.UNSUPPORTED_HASH_ALGORITHM
        assert exc_info.value.details["algorithm"] == "md6"
        assert "sha256" in exc_info.value.details["supported"]

    def test_variable_length_rejected(self):
        with pytest.raises(UnsupportedHashAlgorithmException, match="variable-length"):
            get_hash_function("shake_128")

    def test_supported_algorithms_excludes_shake(self):
        names = supported_algorithms()

        assert "sha256" in names
        assert not any(n.startswith("shake") for n in names)
        assert names == sorted(names)


class TestHashConcat:
    """Tests for hash_concat() and hash_item()."""

    def test_hash_concat_equals_sha256_of_concat(self):
        left = sha256(b"left")
        right = sha256(b"right")

        assert hash_concat(left, right) == sha256(left + right)

    def test_hash_concat_order_matters(self):
        a, b = sha256(b"a"), sha256(b"b")

        assert hash_concat(a, b) != hash_concat(b, a)

    def test_hash_concat_custom_function(self):
        fn = get_hash_function("sha512")

        assert hash_concat(b"l", b"r", fn) == hashlib.sha512(b"lr").digest()

    def test_hash_item_string(self):
        assert hash_item("A") == sha256(b'\x01"A"')

    def test_hash_item_canonical(self):
        """Dict key insertion order does not affect the leaf digest."""
        assert hash_item({"b": 2, "a": 1}) == hash_item({"a": 1, "b": 2})
        assert hash_item({"a": 1, "b": 2}) == sha256(b'\x01{"a":1,"b":2}')

    def test_hash_item_custom_serializer(self):
        assert hash_item(7, serialize=lambda n: bytes([n])) == sha256(b"\x07")

    def test_hash_item_unserializable_raises(self):
        with pytest.raises(CanonicalizationException):
            hash_item(object())


class TestHexConversion:
    """Tests for to_hex() and from_hex() functions."""

    def test_to_hex_format(self):
        result = to_hex(bytes.fromhex("deadbeef"))

        assert result == "0xdeadbeef"

    def test_to_hex_empty(self):
        assert to_hex(b"") == "0x"

    def test_from_hex_valid(self):
        assert from_hex("0xdeadbeef") == bytes.fromhex("deadbeef")

    def test_from_hex_missing_prefix(self):
        with pytest.raises(ValueError, match="must start with '0x'"):
            from_hex("deadbeef")

    def test_from_hex_odd_length(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_from_hex_invalid_chars(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xgg")

    def test_hex_round_trip_sha256(self):
        hash_value = sha256(b"test data")

        hex_str = to_hex(hash_value)

        assert from_hex(hex_str) == hash_value
        assert len(hex_str) == 2 + 64


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
