"""Pytest configuration and fixtures."""

import itertools
from collections.abc import Callable
from datetime import date

import pytest

from bank_ledger.models import Bank, Client
from bank_ledger.store.registry import Registry


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def today() -> date:
    """Fixed business date."""
    return date(2024, 1, 31)


@pytest.fixture
def token_factory() -> Callable[[], str]:
    """Deterministic account number tokens: 00000001, 00000002, ..."""
    counter = itertools.count(1)
    return lambda: f"{next(counter):08d}"


@pytest.fixture
def registry(token_factory: Callable[[], str], today: date) -> Registry:
    """Create a fresh registry with deterministic numbers and clock."""
    ids = itertools.count(1)
    return Registry(
        token_factory=token_factory,
        id_factory=lambda: f"id-{next(ids):04d}",
        clock=lambda: today,
    )


@pytest.fixture
def bank(registry: Registry) -> Bank:
    """Registered sample bank."""
    return registry.add_bank("Alpha Bank", "Alpha", 1.0)


@pytest.fixture
def client(registry: Registry) -> Client:
    """Registered sample client."""
    return registry.add_client("Jane Q Public", "123456789012", "123456", "1234")


@pytest.fixture
def sample_bank() -> Bank:
    """Unregistered bank."""
    return Bank(id="bank-001", full_name="Beta Bank", short_name="Beta", interest_rate=0.5)


@pytest.fixture
def sample_client() -> Client:
    """Unregistered client."""
    return Client(
        id="client-001",
        full_name="John Doe Smith",
        tax_id="000000000001",
        passport_number="654321",
        passport_series="4321",
    )
