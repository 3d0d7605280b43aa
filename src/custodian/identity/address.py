"""Account addresses.

An address is a 32-byte identifier, written as a ``0x``-prefixed hex
literal. Short literals such as ``0x1`` or ``0xAA`` are left-padded with
zeros, so ``AccountAddress.from_hex("0xAA") == AccountAddress.from_hex("0x00aa")``.

Derivation schemes:
- Authentication key: ``sha3_256(ed25519_public_key || 0x00)``
- Resource account: ``sha3_256(source || seed || 0xFF)``
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from ..core.exceptions import ValidationException

ADDRESS_LENGTH = 32

# Scheme bytes appended before hashing
ED25519_SCHEME = b"\x00"
DERIVE_RESOURCE_ACCOUNT_SCHEME = b"\xff"


@dataclass(frozen=True, order=True)
class AccountAddress:
    """Immutable 32-byte account address."""

    value: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.value, bytes) or len(self.value) != ADDRESS_LENGTH:
            raise ValidationException(
                f"Address must be exactly {ADDRESS_LENGTH} bytes",
                field="address",
                value=self.value,
            )

    @classmethod
    def from_hex(cls, literal: str) -> AccountAddress:
        """Parse a hex literal, with or without the ``0x`` prefix.

        Raises:
            ValidationException: If the literal is empty, too long or not hex.
        """
        if not isinstance(literal, str):
            raise ValidationException("Address literal must be a string", field="address", value=literal)

        digits = literal[2:] if literal.lower().startswith("0x") else literal
        if not digits or len(digits) > ADDRESS_LENGTH * 2:
            raise ValidationException(
                f"Address literal must have 1-{ADDRESS_LENGTH * 2} hex digits",
                field="address",
                value=literal,
            )
        try:
            raw = bytes.fromhex(digits.rjust(ADDRESS_LENGTH * 2, "0"))
        except ValueError as e:
            raise ValidationException("Address literal is not valid hex", field="address", value=literal) from e
        return cls(raw)

    @classmethod
    def from_int(cls, number: int) -> AccountAddress:
        """Build an address from an unsigned integer (``0xAA`` -> 170)."""
        if number < 0 or number >= 1 << (ADDRESS_LENGTH * 8):
            raise ValidationException("Address integer out of range", field="address", value=number)
        return cls(number.to_bytes(ADDRESS_LENGTH, "big"))

    @classmethod
    def from_public_key(cls, public_key: Ed25519PublicKey) -> AccountAddress:
        """Derive the authentication-key address of an Ed25519 public key."""
        digest = hashlib.sha3_256(public_key.public_bytes_raw() + ED25519_SCHEME).digest()
        return cls(digest)

    @classmethod
    def coerce(cls, value: AccountAddress | str | int) -> AccountAddress:
        """Accept an address, hex literal or integer."""
        if isinstance(value, AccountAddress):
            return value
        if isinstance(value, bool):
            raise ValidationException("Address cannot be a boolean", field="address", value=value)
        if isinstance(value, int):
            return cls.from_int(value)
        return cls.from_hex(value)

    def short_str(self) -> str:
        """Hex literal with leading zeros trimmed (``0x1``)."""
        return "0x" + (self.value.hex().lstrip("0") or "0")

    def __str__(self) -> str:
        return "0x" + self.value.hex()

    def __repr__(self) -> str:
        return f"AccountAddress({self.short_str()})"

    def __int__(self) -> int:
        return int.from_bytes(self.value, "big")


def create_resource_address(source: AccountAddress, seed: bytes | str) -> AccountAddress:
    """Derive the address of a resource account created by ``source``.

    Args:
        source: Account that creates the resource account (the deployer).
        seed: Seed distinguishing resource accounts of the same source.

    Returns:
        The derived address; identical inputs always yield the same address.
    """
    if isinstance(seed, str):
        seed = seed.encode("utf-8")
    digest = hashlib.sha3_256(source.value + seed + DERIVE_RESOURCE_ACCOUNT_SCHEME).digest()
    return AccountAddress(digest)
