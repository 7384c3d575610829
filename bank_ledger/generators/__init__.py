"""Sample-data generators."""

from bank_ledger.generators.accounts import AccountTermsGenerator, CreditOffer, DepositOffer
from bank_ledger.generators.entities import (
    BankApplication,
    BankGenerator,
    ClientApplication,
    ClientGenerator,
)

__all__ = [
    "AccountTermsGenerator",
    "BankApplication",
    "BankGenerator",
    "ClientApplication",
    "ClientGenerator",
    "CreditOffer",
    "DepositOffer",
]
