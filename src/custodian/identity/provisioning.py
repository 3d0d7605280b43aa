"""Resource account provisioning.

A deployer creates a resource account whose address is derived from the
deployer's address and a seed. The account's signer capability is parked
until the code running as that account claims it, exactly once, through
``retrieve``.

``IdentityProvisioner`` is the contract the package manager consumes;
``ResourceAccountProvisioner`` is an in-memory implementation of it.
"""

from __future__ import annotations

import logging
import threading
from typing import Protocol

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from ..core.exceptions import ConflictError, NotAuthorizedError
from .address import AccountAddress, create_resource_address
from .capabilities import SignerCapability, _mint_signer_capability

logger = logging.getLogger(__name__)


class ProvisioningError(NotAuthorizedError):
    """Caller may not retrieve the requested capability."""

    pass


class IdentityProvisioner(Protocol):
    """Hands out a resource account's signer capability."""

    def retrieve(self, caller: AccountAddress, deployer: AccountAddress) -> SignerCapability:
        """Release the capability of ``caller``, created by ``deployer``."""
        ...


class ResourceAccountProvisioner:
    """In-memory resource account registry.

    Capabilities are kept per deployer until retrieved; each capability is
    released at most once.
    """

    def __init__(self) -> None:
        self._pending: dict[AccountAddress, dict[AccountAddress, SignerCapability]] = {}
        self._created: set[AccountAddress] = set()
        self._lock = threading.Lock()

    def create_resource_account(self, deployer: AccountAddress, seed: bytes | str) -> AccountAddress:
        """Create a resource account for ``deployer`` and park its capability.

        Returns:
            The resource account address.

        Raises:
            ConflictError: If the account already exists.
        """
        address = create_resource_address(deployer, seed)
        with self._lock:
            if address in self._created:
                raise ConflictError(
                    f"Resource account {address.short_str()} already exists",
                    {"address": str(address), "deployer": str(deployer)},
                )
            capability = _mint_signer_capability(address, Ed25519PrivateKey.generate())
            self._pending.setdefault(deployer, {})[address] = capability
            self._created.add(address)

        logger.info(f"Created resource account {address.short_str()} for deployer {deployer.short_str()}")
        return address

    def is_pending(self, address: AccountAddress, deployer: AccountAddress) -> bool:
        """Check whether a capability is still waiting to be retrieved."""
        with self._lock:
            return address in self._pending.get(deployer, {})

    def retrieve(self, caller: AccountAddress, deployer: AccountAddress) -> SignerCapability:
        """Release the capability for ``caller``.

        Raises:
            ProvisioningError: If ``deployer`` did not create ``caller`` or the
                capability was already retrieved.
        """
        with self._lock:
            parked = self._pending.get(deployer, {})
            capability = parked.pop(caller, None)
            if not parked:
                self._pending.pop(deployer, None)

        if capability is None:
            raise ProvisioningError(
                f"No capability for {caller.short_str()} was provisioned by {deployer.short_str()}",
                caller=caller,
            )

        logger.info(f"Released signer capability for {caller.short_str()}")
        return capability
