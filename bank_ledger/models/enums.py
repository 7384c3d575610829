"""Enumeration types for ledger entities."""

from enum import Enum


class AccountType(str, Enum):
    CURRENT = "CURRENT"
    DEPOSIT = "DEPOSIT"
    CREDIT = "CREDIT"

    @property
    def prefix(self) -> str:
        """Three-letter tag that starts every account number of this type."""
        return _PREFIXES[self]


_PREFIXES = {
    AccountType.CURRENT: "CUR",
    AccountType.DEPOSIT: "DEP",
    AccountType.CREDIT: "CRD",
}


class AccountStatus(str, Enum):
    ACTIVE = "ACTIVE"
    CLOSED = "CLOSED"


class InterestCalculation(str, Enum):
    DAILY = "DAILY"
    MONTHLY = "MONTHLY"
