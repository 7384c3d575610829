"""Generators for account opening terms."""

from __future__ import annotations

import random
from dataclasses import dataclass
from decimal import Decimal

from bank_ledger.generators.base import BaseGenerator
from bank_ledger.models.account import MAX_DEPOSIT_RATE, MIN_DEPOSIT_RATE, MIN_DEPOSIT_TERM_MONTHS
from bank_ledger.models.enums import InterestCalculation


@dataclass
class DepositOffer:
    """Arguments for ``Registry.open_deposit_account`` besides client and bank."""

    initial_balance: Decimal
    term_months: int
    min_balance: Decimal
    is_withdrawable: bool
    annual_rate: Decimal
    interest_calculation: InterestCalculation
    is_prolongable: bool


@dataclass
class CreditOffer:
    """Arguments for ``Registry.open_credit_account`` besides client and bank."""

    credit_limit: Decimal
    credit_rate: Decimal
    credit_term: int


class AccountTermsGenerator(BaseGenerator):
    """Generate opening balances and product terms."""

    DEPOSIT_TERMS = [MIN_DEPOSIT_TERM_MONTHS, 6, 12, 24, 36]
    CREDIT_TERMS = [6, 12, 24, 36, 60]
    CREDIT_LIMITS = [500, 1000, 5000, 10000, 50000]

    def current_balance(self) -> Decimal:
        """Opening balance for a current account (0 for about a third)."""
        if random.random() < 0.3:
            return Decimal("0.00")
        return _money(random.lognormvariate(mu=7.0, sigma=1.0))

    def deposit_offer(self) -> DepositOffer:
        min_balance = _money(random.choice([0, 1000, 5000, 10000]))
        # Opening amount always covers the minimum balance
        initial_balance = min_balance + _money(random.uniform(100, 50000))
        rate = random.uniform(float(MIN_DEPOSIT_RATE), float(MAX_DEPOSIT_RATE))

        return DepositOffer(
            initial_balance=initial_balance,
            term_months=random.choice(self.DEPOSIT_TERMS),
            min_balance=min_balance,
            is_withdrawable=random.random() < 0.5,
            annual_rate=Decimal(str(round(rate, 2))),
            interest_calculation=random.choice(list(InterestCalculation)),
            is_prolongable=random.random() < 0.5,
        )

    def credit_offer(self) -> CreditOffer:
        return CreditOffer(
            credit_limit=_money(random.choice(self.CREDIT_LIMITS)),
            credit_rate=Decimal(str(round(random.uniform(9.9, 39.9), 1))),
            credit_term=random.choice(self.CREDIT_TERMS),
        )


def _money(value: float) -> Decimal:
    return Decimal(str(round(value, 2))).quantize(Decimal("0.01"))
