#!/usr/bin/env python3
"""Custodian Demo — walk through a package account's lifecycle.

Prerequisites:
    - pip install -e .

Usage:
    python examples/demo.py
"""

from __future__ import annotations

import json
import sys

from custodian import (
    AccountAddress,
    AuthorityHandle,
    DuplicateNameError,
    InMemoryPackagePublisher,
    NotAuthorizedError,
    ResourceAccountProvisioner,
    ResourceStorage,
    init_module,
)
from custodian.core import configure_logging


def pp(label: str, data: object) -> None:
    """Pretty-print a result."""
    print(f"\n{'='*60}")
    print(f"  {label}")
    print(f"{'='*60}")
    if isinstance(data, dict):
        print(json.dumps(data, indent=2, default=str))
    else:
        print(data)


def main() -> int:
    configure_logging("INFO")
    print("Custodian Demo")
    print("==============")

    deployer = AccountAddress.from_hex("0xD0")
    stranger = AccountAddress.from_hex("0x5E")

    # 1. The deployer creates a resource account; its capability is parked
    print("[1/6] Creating resource account...")
    provisioner = ResourceAccountProvisioner()
    package_address = provisioner.create_resource_account(deployer, b"demo")
    pp("Resource account", {"deployer": str(deployer), "package": str(package_address)})

    # 2. First deployment claims the capability and creates the store
    print("[2/6] Initializing package...")
    storage = ResourceStorage()
    publisher = InMemoryPackagePublisher()
    deployment = init_module(
        storage,
        provisioner,
        package_address=package_address,
        publisher=publisher,
        deployer=deployer,
        friends={"vault", "router"},
    )

    # 3. A friend module registers an address it created
    print("[3/6] Registering named addresses...")
    vault = deployment.friend_access("vault")
    vault.add_named_address("vault", AccountAddress.from_hex("0xAA"))
    try:
        vault.add_named_address("vault", AccountAddress.from_hex("0xBB"))
    except DuplicateNameError as e:
        pp("Duplicate refused", e.to_dict())
    pp("Lookup", {"vault": deployment.public.get_named_address("vault").short_str()})

    # 4. A friend module acts as the package account
    print("[4/6] Materializing authority...")
    authority = deployment.friend_access("router").get_authority()
    token = authority.to_jwt()
    claims = AuthorityHandle.verify_jwt(token, authority.public_key, account=package_address)
    pp("Authority attestation", claims)

    # 5. Only the deployer may publish
    print("[5/6] Publishing as a stranger...")
    try:
        deployment.public.publish_package(stranger, b"meta", [b"code"])
    except NotAuthorizedError as e:
        pp("Refused", e.to_dict())

    print("[6/6] Publishing as the deployer...")
    package = deployment.public.publish_package(deployer, b"meta", [b"code"])
    pp("Published", {
        "account": str(package.account),
        "digest": package.digest.hex(),
        "modules": len(package.code_modules),
    })
    return 0


if __name__ == "__main__":
    sys.exit(main())
