"""Scenarios for populating a ledger with sample data."""

from bank_ledger.scenarios.sample_ledger import SampleLedgerScenario

__all__ = ["SampleLedgerScenario"]
