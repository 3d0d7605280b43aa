"""Deployment lifecycle.

A package address has two states: uninitialized (no ``PermissionStore``
in storage) and active (store present, forever). ``init_module`` performs
the one transition using the capability released by the identity
provisioner. ``initialize_for_test`` does the same with a synthetic
capability and is a no-op when the store already exists.

Usage:
    deployment = init_module(
        storage, provisioner,
        package_address=resource_address,
        deployer=deployer,
        publisher=platform,
        friends={"vault"},
    )
    deployment.public.publish_package(deployer, metadata, modules)
    deployment.friend_access("vault").add_named_address("vault", vault_address)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..core.config import CustodianConfig, get_config
from ..core.defaults import ENV_DEPLOYER
from ..core.exceptions import AlreadyInitializedError, ConfigException, NotAuthorizedError
from ..identity.address import AccountAddress, create_resource_address
from ..identity.capabilities import create_test_signer_capability
from ..identity.provisioning import IdentityProvisioner
from ..platform import InMemoryPackagePublisher, PackagePublisher
from ..storage import ResourceStorage
from .controller import AccessController, FriendInterface, PublicInterface
from .store import PermissionStore

logger = logging.getLogger(__name__)


class Deployment:
    """Handles onto an active package address.

    ``public`` is safe to share with anyone. The ``Deployment`` itself is the
    friend-level credential: whoever holds it can obtain the friend surface,
    so hand it only to the modules that initialized the package and pass
    each friend module its ``FriendInterface`` rather than the deployment.
    """

    def __init__(self, controller: AccessController, friends: Iterable[str] = ()) -> None:
        self._controller = controller
        self._public = PublicInterface(controller)
        self._friend = FriendInterface(controller)
        self.friends: frozenset[str] = frozenset(friends)

    @property
    def address(self) -> AccountAddress:
        return self._controller.address

    @property
    def deployer(self) -> AccountAddress:
        return self._controller.deployer

    @property
    def public(self) -> PublicInterface:
        return self._public

    def friend_access(self, module: str) -> FriendInterface:
        """Get the friend surface for ``module``.

        The name is not authenticated; it only guards against wiring a module
        that was never declared at initialization. Access control rests on
        who holds this ``Deployment``.

        Raises:
            NotAuthorizedError: If ``module`` is not a declared friend.
        """
        if module not in self.friends:
            raise NotAuthorizedError(
                f"Module {module!r} is not a friend of {self.address.short_str()}",
                caller=module,
            )
        return self._friend


def _resolve_deployer(deployer: AccountAddress | None, config: CustodianConfig) -> AccountAddress:
    if deployer is not None:
        return deployer
    if config.deployer is None:
        raise ConfigException("No deployer configured", setting=ENV_DEPLOYER)
    return config.deployer


def init_module(
    storage: ResourceStorage,
    provisioner: IdentityProvisioner,
    package_address: AccountAddress,
    publisher: PackagePublisher,
    deployer: AccountAddress | None = None,
    friends: Iterable[str] = (),
    config: CustodianConfig | None = None,
) -> Deployment:
    """First-deployment initialization of ``package_address``.

    Args:
        storage: Host storage to publish the store into
        provisioner: Releases the package account's capability
        package_address: The controlled (resource) account
        publisher: Package-execution platform for ``publish_package``
        deployer: Deployer identity; falls back to ``CUSTODIAN_DEPLOYER``
        friends: Module names allowed to use the friend surface
        config: Settings (defaults to ``get_config()``)

    Raises:
        AlreadyInitializedError: If the address already holds a store
        ProvisioningError: If the provisioner refuses to release the capability
        ConfigException: If no deployer is given or configured
    """
    config = config or get_config()
    deployer = _resolve_deployer(deployer, config)

    # Refuse before claiming the capability so a second init cannot burn it.
    if storage.exists(package_address, PermissionStore):
        raise AlreadyInitializedError(package_address, PermissionStore.__name__)

    capability = provisioner.retrieve(package_address, deployer)
    store = PermissionStore.create(storage, capability)
    controller = AccessController(store, deployer, publisher, config.authority_ttl_seconds)

    logger.info(f"Initialized {package_address.short_str()} for deployer {deployer.short_str()}")
    return Deployment(controller, friends)


def initialize_for_test(
    storage: ResourceStorage,
    deployer: AccountAddress,
    package_address: AccountAddress | None = None,
    publisher: PackagePublisher | None = None,
    friends: Iterable[str] = (),
    config: CustodianConfig | None = None,
) -> Deployment:
    """Set up an equivalent store with a synthetic capability, for tests.

    Idempotent: if a store already exists at the address it is reused and
    no second record is created.

    Args:
        storage: Host storage
        deployer: Deployer identity
        package_address: Defaults to the resource address derived from
            ``deployer`` and the configured package seed
        publisher: Defaults to a fresh ``InMemoryPackagePublisher``
        friends: Module names allowed to use the friend surface
        config: Settings (defaults to ``get_config()``)
    """
    config = config or get_config()
    if package_address is None:
        package_address = create_resource_address(deployer, config.package_seed)

    if storage.exists(package_address, PermissionStore):
        store = storage.borrow(package_address, PermissionStore)
    else:
        store = PermissionStore.create(storage, create_test_signer_capability(package_address))

    controller = AccessController(
        store,
        deployer,
        publisher or InMemoryPackagePublisher(),
        config.authority_ttl_seconds,
    )
    return Deployment(controller, friends)
