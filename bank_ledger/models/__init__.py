"""Domain models for the bank ledger."""

from bank_ledger.models.account import (
    Account,
    AccountTerms,
    CreditTerms,
    CurrentTerms,
    DepositTerms,
)
from bank_ledger.models.bank import Bank
from bank_ledger.models.client import Client
from bank_ledger.models.enums import AccountStatus, AccountType, InterestCalculation

__all__ = [
    "Account",
    "AccountStatus",
    "AccountTerms",
    "AccountType",
    "Bank",
    "Client",
    "CreditTerms",
    "CurrentTerms",
    "DepositTerms",
    "InterestCalculation",
]
