"""Custodian - Capability-gated controller for a shared package account.

Custodian provides:
- A permission store holding a resource account's signer capability and
  an insert-only name -> address registry
- Access control: public reads, friend-only authority and registration,
  and a deployer-gated ``publish_package``
- Resource account provisioning and a reference package publisher
"""

__version__ = "0.1.0"

from .core.exceptions import (
    AlreadyInitializedError,
    CustodianException,
    DuplicateNameError,
    NameNotFoundError,
    NotAuthorizedError,
)
from .identity import (
    AccountAddress,
    AuthorityHandle,
    ResourceAccountProvisioner,
    SignerCapability,
    create_resource_address,
)
from .manager import (
    AccessController,
    Deployment,
    FriendInterface,
    PermissionStore,
    PublicInterface,
    init_module,
    initialize_for_test,
)
from .platform import InMemoryPackagePublisher, PackagePublisher
from .storage import ResourceStorage

__all__ = [
    "__version__",
    # Errors
    "CustodianException",
    "NotAuthorizedError",
    "DuplicateNameError",
    "NameNotFoundError",
    "AlreadyInitializedError",
    # Identity
    "AccountAddress",
    "AuthorityHandle",
    "SignerCapability",
    "ResourceAccountProvisioner",
    "create_resource_address",
    # Manager
    "PermissionStore",
    "AccessController",
    "PublicInterface",
    "FriendInterface",
    "Deployment",
    "init_module",
    "initialize_for_test",
    # Collaborators
    "PackagePublisher",
    "InMemoryPackagePublisher",
    "ResourceStorage",
]
