#!/usr/bin/env python3
"""Seed an in-memory ledger with sample data and print it.

Banks, clients and accounts are created through the Registry, so the
printed ledger satisfies every registry rule (unique names and tax ids,
per-bank account caps, minimum balances, credit limits).
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bank_ledger.config import AppConfig
from bank_ledger.logging import setup_logging
from bank_ledger.scenarios import SampleLedgerScenario
from bank_ledger.store import Registry

logger = logging.getLogger("bank_ledger.scripts.seed_ledger")


def print_ledger(registry: Registry) -> None:
    """Print banks, clients with their accounts, and totals."""
    print(f"\n{'=' * 60}")
    print("Banks")
    print("=" * 60)
    for index, bank in enumerate(registry.all_banks(), start=1):
        print(f"{index}. {bank}")

    print(f"\n{'=' * 60}")
    print("Clients and accounts")
    print("=" * 60)
    for client in registry.all_clients():
        print(f"{client}")
        for account in registry.accounts_for_client(client):
            print(f"    {account.describe()}")

    print(f"\n{'=' * 60}")
    print("Summary")
    print("=" * 60)
    for key, value in registry.summary().items():
        print(f"  {key}: {value}")


def main() -> None:
    """Main entry point."""
    config = AppConfig.from_env()

    parser = argparse.ArgumentParser(description="Seed an in-memory bank ledger with sample data")
    parser.add_argument(
        "--banks",
        type=int,
        default=config.seeding.num_banks,
        help=f"Number of banks to register (default: {config.seeding.num_banks})",
    )
    parser.add_argument(
        "--clients",
        type=int,
        default=config.seeding.num_clients,
        help=f"Number of clients to register (default: {config.seeding.num_clients})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.seed,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.log_level,
        help="Log level (default: INFO)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines",
    )
    args = parser.parse_args()

    if args.banks < 1 or args.clients < 0:
        parser.error("--banks must be at least 1 and --clients cannot be negative")

    setup_logging(level=args.log_level, format_type="json" if args.json_logs else config.log_format)

    seeding = replace(config.seeding, num_banks=args.banks, num_clients=args.clients)
    scenario = SampleLedgerScenario(
        config=seeding,
        registry=Registry(config=config.ledger),
        seed=args.seed,
    )
    registry = scenario.generate()
    logger.info("Activity: %s", scenario.stats)

    print_ledger(registry)


if __name__ == "__main__":
    main()
