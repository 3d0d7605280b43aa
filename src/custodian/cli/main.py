#!/usr/bin/env python3
"""
Custodian CLI - address utilities and an in-memory walkthrough.

Commands:
  custodian derive-address --source 0x.. --seed TEXT   Resource account address
  custodian normalize ADDRESS [--short]                 Canonical address form
  custodian demo                                        Run the end-to-end scenario
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from ..core.config import get_config
from ..core.exceptions import CustodianException, DuplicateNameError
from ..core.logging import configure_logging
from ..identity.address import AccountAddress, create_resource_address
from ..identity.provisioning import ResourceAccountProvisioner
from ..manager.deployment import init_module
from ..platform import InMemoryPackagePublisher
from ..storage import ResourceStorage

logger = logging.getLogger(__name__)


# ============================================================================
# Commands
# ============================================================================

def cmd_derive_address(args: argparse.Namespace) -> int:
    """Print the resource account address for a source and seed."""
    source = AccountAddress.from_hex(args.source)
    seed = args.seed if args.seed is not None else get_config().package_seed
    print(create_resource_address(source, seed))
    return 0


def cmd_normalize(args: argparse.Namespace) -> int:
    """Print an address literal in long or short form."""
    address = AccountAddress.from_hex(args.address)
    print(address.short_str() if args.short else str(address))
    return 0


def run_demo() -> list[dict[str, Any]]:
    """Run the registry and publish scenario in memory.

    Returns:
        One dict per step describing what happened.
    """
    steps: list[dict[str, Any]] = []
    deployer = AccountAddress.from_hex("0xD0")

    storage = ResourceStorage()
    provisioner = ResourceAccountProvisioner()
    publisher = InMemoryPackagePublisher()

    package_address = provisioner.create_resource_account(deployer, get_config().package_seed)
    deployment = init_module(
        storage,
        provisioner,
        package_address=package_address,
        publisher=publisher,
        deployer=deployer,
        friends={"vault"},
    )
    steps.append({"step": "init", "package_address": str(package_address)})

    vault = deployment.friend_access("vault")
    vault.add_named_address("vault", AccountAddress.from_hex("0xAA"))
    steps.append({"step": "add", "name": "vault", "address": "0xaa"})

    try:
        vault.add_named_address("vault", AccountAddress.from_hex("0xBB"))
    except DuplicateNameError as e:
        steps.append({"step": "add_duplicate", "error": e.to_dict()})

    found = deployment.public.get_named_address("vault")
    steps.append({"step": "lookup", "name": "vault", "address": found.short_str()})

    package = deployment.public.publish_package(deployer, b"metadata", [b"module-a", b"module-b"])
    steps.append({
        "step": "publish",
        "account": package.account.short_str(),
        "digest": package.digest.hex(),
        "modules": len(package.code_modules),
    })
    return steps


def cmd_demo(args: argparse.Namespace) -> int:
    """Run the in-memory scenario and print each step."""
    for step in run_demo():
        print(json.dumps(step, default=str))
    return 0


# ============================================================================
# Main Entry Point
# ============================================================================

def app() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog='custodian',
        description='Capability-gated package account controller',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  custodian derive-address --source 0xd0 --seed custodian
  custodian normalize 0x1 --short
  custodian demo
        """
    )
    parser.add_argument('--log-level', default=None, help='Override CUSTODIAN_LOG_LEVEL')

    subparsers = parser.add_subparsers(dest='command', required=True)

    # derive-address
    derive_parser = subparsers.add_parser('derive-address', help='Derive a resource account address')
    derive_parser.add_argument('--source', '-s', required=True, help='Creating account (hex literal)')
    derive_parser.add_argument('--seed', help='Seed (defaults to CUSTODIAN_PACKAGE_SEED)')

    # normalize
    normalize_parser = subparsers.add_parser('normalize', help='Print an address in canonical form')
    normalize_parser.add_argument('address', help='Hex literal, e.g. 0xAA')
    normalize_parser.add_argument('--short', action='store_true', help='Trim leading zeros')

    # demo
    subparsers.add_parser('demo', help='Run the in-memory end-to-end scenario')

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = app()
    args = parser.parse_args(argv)

    commands = {
        'derive-address': cmd_derive_address,
        'normalize': cmd_normalize,
        'demo': cmd_demo,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        config = get_config()
        configure_logging(args.log_level or config.log_level, json_format=config.log_json)
        return handler(args)
    except CustodianException as e:
        logger.debug(f"{args.command} failed", exc_info=True)
        print(f"❌ {e.message}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
