"""Permission store.

The single record held at the controlled account's storage location. It
owns the account's ``SignerCapability`` and the name registry, and is the
only holder of mutable access to either. It performs no authorization;
callers go through ``custodian.manager.controller``.
"""

from __future__ import annotations

import logging
import threading

from ..core.defaults import DEFAULT_AUTHORITY_TTL_SECONDS
from ..core.exceptions import DuplicateNameError, NameNotFoundError, ValidationException
from ..events import EventHandle, NamedAddressAdded
from ..identity.address import AccountAddress
from ..identity.capabilities import AuthorityHandle, SignerCapability
from ..storage import ResourceStorage

logger = logging.getLogger(__name__)


def _check_name(name: str) -> None:
    if not isinstance(name, str):
        raise ValidationException("Name must be a string", field="name", value=name)


class PermissionStore:
    """Capability plus insert-only name registry.

    Invariants:
    - The capability is set at construction and never reassigned.
    - Registry keys are unique and a (name, address) pair never changes.
    """

    __slots__ = ("_capability", "_registry", "_lock", "address_added_events")

    def __init__(self, capability: SignerCapability) -> None:
        if not isinstance(capability, SignerCapability):
            raise TypeError("PermissionStore requires a SignerCapability")
        self._capability = capability
        self._registry: dict[str, AccountAddress] = {}
        self._lock = threading.Lock()
        self.address_added_events = EventHandle()

    @classmethod
    def create(cls, storage: ResourceStorage, capability: SignerCapability) -> PermissionStore:
        """Create the store and publish it at ``capability.account``.

        Raises:
            AlreadyInitializedError: If a store already exists at that location.
        """
        store = cls(capability)
        storage.move_to(capability.account, store)
        logger.info(f"Created permission store at {capability.account.short_str()}")
        return store

    def __setattr__(self, name: str, value: object) -> None:
        if name == "_capability" and hasattr(self, "_capability"):
            raise AttributeError("The signer capability is set once at creation")
        object.__setattr__(self, name, value)

    @property
    def account(self) -> AccountAddress:
        """The controlled account this store lives at."""
        return self._capability.account

    def materialize_authority(self, ttl_seconds: int | None = None) -> AuthorityHandle:
        """Derive a fresh authority handle from the stored capability."""
        if ttl_seconds is None:
            ttl_seconds = DEFAULT_AUTHORITY_TTL_SECONDS
        return self._capability.materialize(ttl_seconds)

    def insert(self, name: str, address: AccountAddress) -> None:
        """Register ``name`` -> ``address``.

        Raises:
            DuplicateNameError: If ``name`` is already registered; the registry is unchanged.
        """
        _check_name(name)
        address = AccountAddress.coerce(address)
        with self._lock:
            if name in self._registry:
                raise DuplicateNameError(name)
            self._registry[name] = address
            self.address_added_events.emit(NamedAddressAdded(name=name, address=address))

        logger.info(f"Registered {name!r} -> {address.short_str()}")

    def contains(self, name: str) -> bool:
        _check_name(name)
        with self._lock:
            return name in self._registry

    def lookup(self, name: str) -> AccountAddress:
        """Get the address registered under ``name``.

        Raises:
            NameNotFoundError: If ``name`` is not registered.
        """
        _check_name(name)
        with self._lock:
            address = self._registry.get(name)
        if address is None:
            raise NameNotFoundError(name)
        return address

    def __len__(self) -> int:
        with self._lock:
            return len(self._registry)

    def __repr__(self) -> str:
        return f"PermissionStore(account={self.account.short_str()}, names={len(self)})"
