"""Access controller for the permission store.

Three trust tiers:
- Public reads: ``named_address_exists``, ``get_named_address``. No checks.
- Friend-only: ``get_authority``, ``add_named_address``. Reachable only
  through a ``FriendInterface``, which is handed out to modules declared
  as friends of the deployment.
- Privileged: ``publish_package``. Caller must be the deployer; checked
  on every call.

``PublicInterface`` and ``FriendInterface`` are thin views over one
``AccessController``; each exposes only its tier's operations.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from ..core.exceptions import NotAuthorizedError
from ..identity.address import AccountAddress
from ..identity.capabilities import AuthorityHandle
from ..platform import PackagePublisher
from .store import PermissionStore

logger = logging.getLogger(__name__)


class AccessController:
    """Gates the permission store behind caller identity checks."""

    def __init__(
        self,
        store: PermissionStore,
        deployer: AccountAddress,
        publisher: PackagePublisher,
        authority_ttl_seconds: int | None = None,
    ) -> None:
        self._store = store
        self._deployer = deployer
        self._publisher = publisher
        self._authority_ttl_seconds = authority_ttl_seconds

    @property
    def address(self) -> AccountAddress:
        """The controlled account."""
        return self._store.account

    @property
    def deployer(self) -> AccountAddress:
        return self._deployer

    # -------------------------------------------------------------------------
    # Public reads
    # -------------------------------------------------------------------------

    def named_address_exists(self, name: str) -> bool:
        return self._store.contains(name)

    def get_named_address(self, name: str) -> AccountAddress:
        """Raises ``NameNotFoundError`` if ``name`` is not registered."""
        return self._store.lookup(name)

    # -------------------------------------------------------------------------
    # Friend-only
    # -------------------------------------------------------------------------

    def get_authority(self) -> AuthorityHandle:
        """Materialize authority to act as the controlled account."""
        return self._store.materialize_authority(self._authority_ttl_seconds)

    def add_named_address(self, name: str, address: AccountAddress | str | int) -> None:
        """Raises ``DuplicateNameError`` if ``name`` is already registered."""
        self._store.insert(name, address)

    # -------------------------------------------------------------------------
    # Privileged
    # -------------------------------------------------------------------------

    def publish_package(
        self,
        caller: AccountAddress,
        package_metadata: bytes,
        code_modules: Sequence[bytes],
    ) -> Any:
        """Publish code under the controlled account on the deployer's behalf.

        Args:
            caller: Identity of the account invoking the operation
            package_metadata: Serialized package metadata, passed through unchanged
            code_modules: Serialized modules, passed through unchanged

        Returns:
            Whatever the platform's ``publish`` returns.

        Raises:
            NotAuthorizedError: If ``caller`` is not the deployer.
        """
        if not isinstance(caller, AccountAddress) or caller != self._deployer:
            logger.warning(f"Refused publish_package from {caller} for {self.address.short_str()}")
            raise NotAuthorizedError(
                f"Only the deployer may publish under {self.address.short_str()}",
                caller=caller,
            )

        logger.info(f"Publishing package under {self.address.short_str()} for {caller.short_str()}")
        return self._publisher.publish(self.get_authority(), package_metadata, code_modules)


class PublicInterface:
    """Surface callable by anyone: reads and the deployer-gated publish."""

    __slots__ = ("_controller",)

    def __init__(self, controller: AccessController) -> None:
        self._controller = controller

    @property
    def address(self) -> AccountAddress:
        return self._controller.address

    def named_address_exists(self, name: str) -> bool:
        return self._controller.named_address_exists(name)

    def get_named_address(self, name: str) -> AccountAddress:
        return self._controller.get_named_address(name)

    def publish_package(
        self,
        caller: AccountAddress,
        package_metadata: bytes,
        code_modules: Sequence[bytes],
    ) -> Any:
        return self._controller.publish_package(caller, package_metadata, code_modules)


class FriendInterface:
    """Surface for modules shipped in the same deployment unit."""

    __slots__ = ("_controller",)

    def __init__(self, controller: AccessController) -> None:
        self._controller = controller

    @property
    def address(self) -> AccountAddress:
        return self._controller.address

    def get_authority(self) -> AuthorityHandle:
        return self._controller.get_authority()

    def add_named_address(self, name: str, address: AccountAddress | str | int) -> None:
        self._controller.add_named_address(name, address)
