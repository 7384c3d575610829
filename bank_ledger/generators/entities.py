"""Generators for bank and client registration data."""

from __future__ import annotations

import random
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterator

from bank_ledger.generators.base import BaseGenerator
from bank_ledger.models.bank import MAX_INTEREST_RATE, MIN_INTEREST_RATE
from bank_ledger.models.client import MIN_NAME_LENGTH


@dataclass
class BankApplication:
    """Arguments for ``Registry.add_bank``."""

    full_name: str
    short_name: str
    interest_rate: Decimal


@dataclass
class ClientApplication:
    """Arguments for ``Registry.add_client``."""

    full_name: str
    tax_id: str
    passport_number: str
    passport_series: str


class BankGenerator(BaseGenerator):
    """Generate synthetic banks.

    Names come from Faker company names; the short name is built from
    their initials, so collisions are possible and left to the caller.
    """

    SUFFIXES = ["Bank", "Savings Bank", "Trust", "Bancorp"]

    def generate(self) -> BankApplication:
        """Generate a single bank application."""
        company = self.fake.company()
        full_name = f"{company} {random.choice(self.SUFFIXES)}"
        initials = "".join(word[0] for word in full_name.replace(",", " ").split() if word[0].isalpha())
        rate = random.uniform(float(MIN_INTEREST_RATE), float(MAX_INTEREST_RATE))

        return BankApplication(
            full_name=full_name,
            short_name=initials.upper() or company,
            interest_rate=Decimal(str(round(rate, 2))),
        )

    def generate_batch(self, count: int) -> Iterator[BankApplication]:
        for _ in range(count):
            yield self.generate()


class ClientGenerator(BaseGenerator):
    """Generate synthetic clients with digit-only identity documents."""

    def generate(self) -> ClientApplication:
        """Generate a single client application."""
        name = self.fake.name()
        while len(name.strip()) < MIN_NAME_LENGTH:
            name = self.fake.name()

        return ClientApplication(
            full_name=name,
            tax_id=self.fake.numerify("#" * 12),
            passport_number=self.fake.numerify("#" * 6),
            passport_series=self.fake.numerify("#" * 4),
        )

    def generate_batch(self, count: int) -> Iterator[ClientApplication]:
        """Generate multiple client applications.

        Parameters
        ----------
        count : int
            Number of clients to generate.

        Yields
        ------
        ClientApplication
            Generated applications. Tax ids are random and may repeat.
        """
        for _ in range(count):
            yield self.generate()
