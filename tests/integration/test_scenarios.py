"""End-to-end scenarios across provisioning, store, controller and platform."""

from __future__ import annotations

import pytest

from custodian import (
    AccountAddress,
    DuplicateNameError,
    InMemoryPackagePublisher,
    NameNotFoundError,
    NotAuthorizedError,
    PermissionStore,
    ResourceAccountProvisioner,
    ResourceStorage,
    init_module,
    initialize_for_test,
)


@pytest.fixture
def live(deployer, config):
    """A deployment created through the real provisioning path."""
    storage = ResourceStorage()
    provisioner = ResourceAccountProvisioner()
    publisher = InMemoryPackagePublisher()
    address = provisioner.create_resource_account(deployer, config.package_seed)
    deployment = init_module(
        storage,
        provisioner,
        package_address=address,
        publisher=publisher,
        deployer=deployer,
        friends={"vault"},
        config=config,
    )
    return deployment, storage, publisher


class TestRegistryScenario:
    def test_insert_once_read_many(self, live):
        deployment, _, _ = live
        vault = deployment.friend_access("vault")
        public = deployment.public

        vault.add_named_address("vault", AccountAddress.from_hex("0xAA"))
        assert public.get_named_address("vault") == AccountAddress.from_hex("0xAA")

        with pytest.raises(DuplicateNameError):
            vault.add_named_address("vault", AccountAddress.from_hex("0xBB"))

        assert public.get_named_address("vault") == AccountAddress.from_hex("0xAA")

    @pytest.mark.parametrize("name", ["vault", "pool", "", "Vault"])
    def test_lookup_fails_iff_absent(self, live, name):
        deployment, _, _ = live
        deployment.friend_access("vault").add_named_address("vault", AccountAddress.from_hex("0xAA"))
        public = deployment.public

        if public.named_address_exists(name):
            assert public.get_named_address(name) == AccountAddress.from_hex("0xAA")
        else:
            with pytest.raises(NameNotFoundError):
                public.get_named_address(name)


class TestPublishScenario:
    def test_deployer_publishes_without_side_effects(self, live, deployer):
        deployment, storage, publisher = live
        deployment.friend_access("vault").add_named_address("vault", AccountAddress.from_hex("0xAA"))
        store = storage.borrow(deployment.address, PermissionStore)
        key_before = store.materialize_authority().public_key_hex

        package = deployment.public.publish_package(deployer, b"meta", [b"code"])

        assert package.account == deployment.address
        assert publisher.latest(deployment.address) is package
        assert len(store) == 1
        assert store.lookup("vault") == AccountAddress.from_hex("0xAA")
        assert store.materialize_authority().public_key_hex == key_before
        assert store.address_added_events.counter == 1

    def test_stranger_cannot_publish(self, live, stranger):
        deployment, _, publisher = live

        with pytest.raises(NotAuthorizedError):
            deployment.public.publish_package(stranger, b"meta", [b"code"])

        assert publisher.packages(deployment.address) == []

    def test_friend_authority_signs_for_package(self, live):
        deployment, _, publisher = live
        authority = deployment.friend_access("vault").get_authority()

        # A friend can act as the package account directly.
        package = publisher.publish(authority, b"friend", [])

        assert package.account == deployment.address


class TestBootstrapScenario:
    def test_bootstrap_twice_yields_one_record(self, deployer, config):
        storage = ResourceStorage()

        first = initialize_for_test(storage, deployer, config=config)
        second = initialize_for_test(storage, deployer, config=config)

        assert len(storage) == 1
        assert first.address == second.address
