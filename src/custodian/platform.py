"""Package-execution platform contract.

The package manager hands an ``AuthorityHandle`` and the raw package bytes
to a ``PackagePublisher``. What the platform does with them (validation,
compilation, installation) is its own business; its errors propagate to
the caller of ``publish_package`` unchanged.

``InMemoryPackagePublisher`` records what it was given, signed by the
authority it was given. It does not inspect the package contents.
"""

from __future__ import annotations

import hashlib
import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol

from .identity.address import AccountAddress
from .identity.capabilities import AuthorityHandle

logger = logging.getLogger(__name__)


class PackagePublisher(Protocol):
    """Publishes code under the account an authority handle acts for."""

    def publish(
        self,
        authority: AuthorityHandle,
        package_metadata: bytes,
        code_modules: Sequence[bytes],
    ) -> Any:
        ...


def package_digest(package_metadata: bytes, code_modules: Sequence[bytes]) -> bytes:
    """SHA3-256 over the metadata and each module, length-prefixed."""
    hasher = hashlib.sha3_256()
    for blob in (package_metadata, *code_modules):
        hasher.update(len(blob).to_bytes(8, "big"))
        hasher.update(blob)
    return hasher.digest()


@dataclass(frozen=True)
class PublishedPackage:
    """A package recorded by ``InMemoryPackagePublisher``."""

    account: AccountAddress
    package_metadata: bytes
    code_modules: tuple[bytes, ...]
    digest: bytes
    signature: bytes
    published_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class InMemoryPackagePublisher:
    """Records published packages per account, newest last."""

    def __init__(self) -> None:
        self._packages: dict[AccountAddress, list[PublishedPackage]] = {}
        self._lock = threading.Lock()

    def publish(
        self,
        authority: AuthorityHandle,
        package_metadata: bytes,
        code_modules: Sequence[bytes],
    ) -> PublishedPackage:
        """Record a package under ``authority.account``.

        Raises:
            CapabilityExpiredError: If the authority handle has expired.
        """
        digest = package_digest(package_metadata, code_modules)
        signature = authority.sign(digest)

        package = PublishedPackage(
            account=authority.account,
            package_metadata=bytes(package_metadata),
            code_modules=tuple(bytes(m) for m in code_modules),
            digest=digest,
            signature=signature,
        )
        with self._lock:
            self._packages.setdefault(authority.account, []).append(package)

        logger.info(
            f"Published package {digest.hex()[:16]} under {authority.account.short_str()} "
            f"({len(package.code_modules)} modules)"
        )
        return package

    def packages(self, account: AccountAddress) -> list[PublishedPackage]:
        with self._lock:
            return list(self._packages.get(account, []))

    def latest(self, account: AccountAddress) -> PublishedPackage | None:
        with self._lock:
            published = self._packages.get(account)
            return published[-1] if published else None
