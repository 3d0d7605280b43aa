"""Tests for resource account provisioning."""

from __future__ import annotations

import pytest

from custodian.core.exceptions import ConflictError, NotAuthorizedError
from custodian.identity.address import AccountAddress, create_resource_address
from custodian.identity.capabilities import SignerCapability
from custodian.identity.provisioning import ProvisioningError, ResourceAccountProvisioner


@pytest.fixture
def provisioner() -> ResourceAccountProvisioner:
    return ResourceAccountProvisioner()


class TestResourceAccountProvisioner:
    """The capability is released exactly once, to the right caller."""

    def test_create_derives_address(self, provisioner, deployer):
        address = provisioner.create_resource_account(deployer, b"seed")

        assert address == create_resource_address(deployer, b"seed")
        assert provisioner.is_pending(address, deployer)

    def test_create_twice_conflicts(self, provisioner, deployer):
        provisioner.create_resource_account(deployer, b"seed")

        with pytest.raises(ConflictError, match="already exists"):
            provisioner.create_resource_account(deployer, b"seed")

    def test_retrieve_releases_capability(self, provisioner, deployer):
        address = provisioner.create_resource_account(deployer, b"seed")

        capability = provisioner.retrieve(address, deployer)

        assert isinstance(capability, SignerCapability)
        assert capability.account == address
        assert not provisioner.is_pending(address, deployer)

    def test_retrieve_only_once(self, provisioner, deployer):
        address = provisioner.create_resource_account(deployer, b"seed")
        provisioner.retrieve(address, deployer)

        with pytest.raises(ProvisioningError):
            provisioner.retrieve(address, deployer)

    def test_retrieve_with_wrong_deployer(self, provisioner, deployer, stranger):
        address = provisioner.create_resource_account(deployer, b"seed")

        with pytest.raises(NotAuthorizedError):
            provisioner.retrieve(address, stranger)

        # Still claimable by the right caller
        assert provisioner.is_pending(address, deployer)

    def test_retrieve_unknown_account(self, provisioner, deployer):
        with pytest.raises(ProvisioningError) as exc_info:
            provisioner.retrieve(AccountAddress.from_hex("0x99"), deployer)

        assert exc_info.value.caller == AccountAddress.from_hex("0x99")

    def test_accounts_get_distinct_keys(self, provisioner, deployer):
        a = provisioner.create_resource_account(deployer, b"one")
        b = provisioner.create_resource_account(deployer, b"two")

        key_a = provisioner.retrieve(a, deployer).materialize().public_key_hex
        key_b = provisioner.retrieve(b, deployer).materialize().public_key_hex

        assert key_a != key_b
