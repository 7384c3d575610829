"""In-memory registry of banks, clients and accounts."""

from bank_ledger.store.registry import Registry

__all__ = ["Registry"]
