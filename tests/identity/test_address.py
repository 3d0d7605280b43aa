"""Tests for account addresses and address derivation."""

from __future__ import annotations

import hashlib

import pytest
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from custodian.core.exceptions import ValidationException
from custodian.identity.address import (
    ADDRESS_LENGTH,
    AccountAddress,
    create_resource_address,
)


class TestAccountAddressParsing:
    """Tests for hex literal parsing and rendering."""

    def test_short_literal_is_left_padded(self):
        address = AccountAddress.from_hex("0xAA")

        assert address.value == b"\x00" * (ADDRESS_LENGTH - 1) + b"\xaa"
        assert str(address) == "0x" + "0" * 62 + "aa"

    def test_equivalent_literals_are_equal(self):
        assert AccountAddress.from_hex("0xAA") == AccountAddress.from_hex("0x00aa")
        assert AccountAddress.from_hex("aa") == AccountAddress.from_hex("0xAA")
        assert hash(AccountAddress.from_hex("0xaa")) == hash(AccountAddress.from_hex("0xAA"))

    def test_short_str(self):
        assert AccountAddress.from_hex("0x0001").short_str() == "0x1"
        assert AccountAddress.from_hex("0x0").short_str() == "0x0"

    def test_long_form_round_trips(self):
        address = AccountAddress.from_hex("0xAA")

        assert AccountAddress.from_hex(str(address)) == address

    @pytest.mark.parametrize("literal", ["", "0x", "0xzz", "0x" + "1" * 65])
    def test_invalid_literals_rejected(self, literal):
        with pytest.raises(ValidationException) as exc_info:
            AccountAddress.from_hex(literal)

        assert exc_info.value.field == "address"

    def test_wrong_length_bytes_rejected(self):
        with pytest.raises(ValidationException):
            AccountAddress(b"\x01\x02")

    def test_int_conversion(self):
        address = AccountAddress.from_int(0xAA)

        assert address == AccountAddress.from_hex("0xAA")
        assert int(address) == 0xAA

    def test_coerce(self):
        expected = AccountAddress.from_hex("0xAA")

        assert AccountAddress.coerce(expected) is expected
        assert AccountAddress.coerce("0xaa") == expected
        assert AccountAddress.coerce(0xAA) == expected

    def test_coerce_rejects_bool(self):
        with pytest.raises(ValidationException):
            AccountAddress.coerce(True)

    def test_addresses_are_immutable(self):
        address = AccountAddress.from_hex("0x1")

        with pytest.raises(AttributeError):
            address.value = b"\x00" * ADDRESS_LENGTH  # type: ignore[misc]


class TestDerivation:
    """Tests for authentication key and resource account derivation."""

    def test_from_public_key_uses_ed25519_scheme(self):
        public_key = Ed25519PrivateKey.generate().public_key()
        expected = hashlib.sha3_256(public_key.public_bytes_raw() + b"\x00").digest()

        assert AccountAddress.from_public_key(public_key).value == expected

    def test_resource_address_is_deterministic(self):
        source = AccountAddress.from_hex("0xD0")

        assert create_resource_address(source, "seed") == create_resource_address(source, b"seed")

    def test_resource_address_matches_scheme(self):
        source = AccountAddress.from_hex("0xD0")
        expected = hashlib.sha3_256(source.value + b"seed" + b"\xff").digest()

        assert create_resource_address(source, b"seed").value == expected

    def test_resource_address_varies_by_seed_and_source(self):
        a = AccountAddress.from_hex("0xD0")
        b = AccountAddress.from_hex("0xD1")

        assert create_resource_address(a, b"one") != create_resource_address(a, b"two")
        assert create_resource_address(a, b"one") != create_resource_address(b, b"one")
