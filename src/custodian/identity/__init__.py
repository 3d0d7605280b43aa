"""Account identity: addresses, signer capabilities, provisioning."""

from .address import (
    ADDRESS_LENGTH,
    AccountAddress,
    create_resource_address,
)
from .capabilities import (
    AuthorityHandle,
    CapabilityError,
    CapabilityExpiredError,
    CapabilityInvalidSignatureError,
    SignerCapability,
    create_test_signer_capability,
)
from .provisioning import (
    IdentityProvisioner,
    ProvisioningError,
    ResourceAccountProvisioner,
)

__all__ = [
    # Addresses
    "ADDRESS_LENGTH",
    "AccountAddress",
    "create_resource_address",
    # Capabilities
    "AuthorityHandle",
    "SignerCapability",
    "CapabilityError",
    "CapabilityExpiredError",
    "CapabilityInvalidSignatureError",
    "create_test_signer_capability",
    # Provisioning
    "IdentityProvisioner",
    "ProvisioningError",
    "ResourceAccountProvisioner",
]
