"""Shared fixtures for Custodian tests."""

from __future__ import annotations

import pytest

from custodian.core.config import CustodianConfig, reset_config
from custodian.identity.address import AccountAddress
from custodian.manager import Deployment, initialize_for_test
from custodian.platform import InMemoryPackagePublisher
from custodian.storage import ResourceStorage


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch):
    """Isolate every test from CUSTODIAN_* variables and the cached config."""
    for key in (
        "CUSTODIAN_DEPLOYER",
        "CUSTODIAN_PACKAGE_SEED",
        "CUSTODIAN_AUTHORITY_TTL_SECONDS",
        "CUSTODIAN_LOG_LEVEL",
        "CUSTODIAN_LOG_JSON",
    ):
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config() -> CustodianConfig:
    return CustodianConfig()


@pytest.fixture
def deployer() -> AccountAddress:
    return AccountAddress.from_hex("0xD0")


@pytest.fixture
def stranger() -> AccountAddress:
    return AccountAddress.from_hex("0x5E")


@pytest.fixture
def storage() -> ResourceStorage:
    return ResourceStorage()


@pytest.fixture
def publisher() -> InMemoryPackagePublisher:
    return InMemoryPackagePublisher()


@pytest.fixture
def deployment(
    storage: ResourceStorage,
    deployer: AccountAddress,
    publisher: InMemoryPackagePublisher,
    config: CustodianConfig,
) -> Deployment:
    """Active deployment with a synthetic capability and one friend module."""
    return initialize_for_test(
        storage,
        deployer,
        publisher=publisher,
        friends={"vault"},
        config=config,
    )
