"""Signer capabilities and authority handles.

Implements OCAP (object-capability) style authority over an account:
- ``SignerCapability`` is the unforgeable, long-lived proof of the right to
  act as an account. It cannot be constructed outside the minting path,
  cannot be copied and cannot be pickled.
- ``AuthorityHandle`` is the short-lived authority materialized from a
  capability. It signs messages as the account until it expires.

Handles can be exported as EdDSA-signed JWTs so a remote party holding the
public key can check that the bearer acted for the account.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey, Ed25519PublicKey

from ..core.defaults import DEFAULT_AUTHORITY_TTL_SECONDS, MAX_AUTHORITY_TTL_SECONDS
from ..core.exceptions import CustodianException, ValidationException
from .address import AccountAddress

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "EdDSA"


# =============================================================================
# ERRORS
# =============================================================================


class CapabilityError(CustodianException):
    """Base error for capability operations."""

    pass


class CapabilityExpiredError(CapabilityError):
    """Authority handle has expired."""

    pass


class CapabilityInvalidSignatureError(CapabilityError):
    """Signature or token does not verify."""

    pass


# =============================================================================
# AUTHORITY HANDLE
# =============================================================================


@dataclass(frozen=True)
class AuthorityHandle:
    """Time-bounded authority to act as an account.

    Attributes:
        id: Unique handle identifier
        account: Account this handle acts for
        issued_at: When the handle was materialized
        expires_at: When the handle stops signing
    """

    id: str
    account: AccountAddress
    issued_at: datetime
    expires_at: datetime
    _signing_key: Ed25519PrivateKey = field(repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.expires_at <= self.issued_at:
            raise ValueError("expires_at must be after issued_at")

    @property
    def public_key(self) -> Ed25519PublicKey:
        return self._signing_key.public_key()

    @property
    def public_key_hex(self) -> str:
        return self.public_key.public_bytes_raw().hex()

    @property
    def is_expired(self) -> bool:
        return datetime.now(timezone.utc) >= self.expires_at

    @property
    def ttl_seconds(self) -> float:
        """Remaining lifetime in seconds (negative once expired)."""
        return (self.expires_at - datetime.now(timezone.utc)).total_seconds()

    def sign(self, message: bytes) -> bytes:
        """Sign ``message`` as the account.

        Raises:
            CapabilityExpiredError: If the handle has expired.
        """
        if self.is_expired:
            raise CapabilityExpiredError(
                f"Authority handle {self.id} for {self.account.short_str()} has expired",
                {"handle_id": self.id, "account": str(self.account)},
            )
        return self._signing_key.sign(message)

    def verify(self, message: bytes, signature: bytes) -> bool:
        """Check a signature produced by ``sign``.

        Raises:
            CapabilityInvalidSignatureError: If the signature does not match.
        """
        try:
            self.public_key.verify(signature, message)
        except InvalidSignature as e:
            raise CapabilityInvalidSignatureError(
                f"Invalid signature for {self.account.short_str()}",
                {"handle_id": self.id},
            ) from e
        return True

    def to_jwt(self) -> str:
        """Export the handle as an EdDSA-signed JWT attestation.

        Raises:
            CapabilityExpiredError: If the handle has expired.
        """
        if self.is_expired:
            raise CapabilityExpiredError(f"Authority handle {self.id} has expired")
        payload = {
            "jti": self.id,
            "iss": str(self.account),
            "sub": str(self.account),
            "iat": int(self.issued_at.timestamp()),
            "exp": int(self.expires_at.timestamp()),
            "pub": self.public_key_hex,
        }
        return jwt.encode(payload, self._signing_key, algorithm=JWT_ALGORITHM)

    @staticmethod
    def verify_jwt(
        token: str,
        public_key: Ed25519PublicKey,
        account: AccountAddress | None = None,
    ) -> dict[str, Any]:
        """Verify a token from ``to_jwt`` and return its claims.

        Args:
            token: JWT string
            public_key: Public key of the account's signing key
            account: If given, the token must have been issued for this account

        Raises:
            CapabilityExpiredError: If the token has expired
            CapabilityInvalidSignatureError: If the token is invalid or for another account
        """
        try:
            claims = jwt.decode(token, public_key, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError as e:
            raise CapabilityExpiredError("Authority token has expired") from e
        except jwt.InvalidTokenError as e:
            raise CapabilityInvalidSignatureError(f"Invalid authority token: {e}") from e

        if account is not None and claims.get("sub") != str(account):
            raise CapabilityInvalidSignatureError(
                f"Authority token was issued for {claims.get('sub')}, not {account}"
            )
        return claims


# =============================================================================
# SIGNER CAPABILITY
# =============================================================================

# Held only by this module; without it SignerCapability cannot be built.
_MINT_KEY = object()


class SignerCapability:
    """Unforgeable, non-copyable capability to act as an account.

    Instances come only from the identity-provisioning path
    (``custodian.identity.provisioning``) or from
    ``create_test_signer_capability``.
    """

    __slots__ = ("_account", "_signing_key")

    def __init__(self, account: AccountAddress, signing_key: Ed25519PrivateKey, mint_key: object) -> None:
        if mint_key is not _MINT_KEY:
            raise TypeError("SignerCapability cannot be constructed directly")
        object.__setattr__(self, "_account", account)
        object.__setattr__(self, "_signing_key", signing_key)

    @property
    def account(self) -> AccountAddress:
        return self._account

    def materialize(self, ttl_seconds: int = DEFAULT_AUTHORITY_TTL_SECONDS) -> AuthorityHandle:
        """Derive a fresh, time-bounded authority handle.

        Does not consume or change the capability.

        Raises:
            ValidationException: If ``ttl_seconds`` is outside (0, MAX_AUTHORITY_TTL_SECONDS].
        """
        if not 0 < ttl_seconds <= MAX_AUTHORITY_TTL_SECONDS:
            raise ValidationException(
                f"ttl_seconds must be in (0, {MAX_AUTHORITY_TTL_SECONDS}]",
                field="ttl_seconds",
                value=ttl_seconds,
            )
        now = datetime.now(timezone.utc)
        return AuthorityHandle(
            id=str(uuid.uuid4()),
            account=self._account,
            issued_at=now,
            expires_at=now + timedelta(seconds=ttl_seconds),
            _signing_key=self._signing_key,
        )

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("SignerCapability is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("SignerCapability is immutable")

    def __copy__(self) -> SignerCapability:
        raise TypeError("SignerCapability cannot be copied")

    def __deepcopy__(self, memo: dict[int, Any]) -> SignerCapability:
        raise TypeError("SignerCapability cannot be copied")

    def __reduce_ex__(self, protocol: Any) -> Any:
        raise TypeError("SignerCapability cannot be serialized")

    def __repr__(self) -> str:
        return f"SignerCapability(account={self._account.short_str()})"


def _mint_signer_capability(account: AccountAddress, signing_key: Ed25519PrivateKey) -> SignerCapability:
    """Mint a capability. Used by the provisioning path only."""
    return SignerCapability(account, signing_key, _MINT_KEY)


def create_test_signer_capability(account: AccountAddress) -> SignerCapability:
    """Mint a capability with a synthetic key, for isolated tests only."""
    logger.debug(f"Minting synthetic signer capability for {account.short_str()}")
    return _mint_signer_capability(account, Ed25519PrivateKey.generate())
