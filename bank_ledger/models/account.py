"""Account model and the per-variant balance rules.

Every account is a single ``Account`` record. What differs between the
current, deposit and credit products lives in the ``terms`` payload, and
``Account`` dispatches ``withdraw``/``can_close``/``describe`` to it:

- ``CurrentTerms``: everyday account, cannot go below zero
- ``DepositTerms``: term deposit locked above a minimum balance
- ``CreditTerms``: credit line that may go negative down to ``-credit_limit``
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import ClassVar

from bank_ledger.exceptions import (
    BelowMinimumBalanceError,
    ConstraintViolationError,
    InvalidAmountError,
    InvalidCreditLimitError,
    ValidationError,
)
from bank_ledger.models.bank import Bank
from bank_ledger.models.base import add_months, to_decimal, to_money
from bank_ledger.models.client import Client
from bank_ledger.models.enums import AccountStatus, AccountType, InterestCalculation

ZERO = Decimal("0.00")

MIN_DEPOSIT_TERM_MONTHS = 3
MIN_DEPOSIT_RATE = Decimal("18.0")
MAX_DEPOSIT_RATE = Decimal("25.0")


@dataclass(frozen=True)
class CurrentTerms:
    """Terms of a current (everyday) account. No extra fields."""

    account_type: ClassVar[AccountType] = AccountType.CURRENT

    def validate_opening(self, balance: Decimal) -> None:
        if balance < ZERO:
            raise ValidationError("current account cannot open with a negative balance")

    def allows_withdrawal(self, account: "Account", amount: Decimal) -> bool:
        return amount > ZERO and account.balance >= amount

    def can_close(self, account: "Account", today: date) -> bool:
        return account.balance == ZERO

    def describe(self, account: "Account") -> str:
        return (
            f"Current account {account.account_number}, balance: {account.balance}, "
            f"bank: {account.bank.short_name}"
        )


@dataclass(frozen=True)
class DepositTerms:
    """Terms of a fixed-term deposit.

    Parameters
    ----------
    term_months : int
        Deposit term, at least 3 months.
    min_balance : Decimal
        Balance the deposit must never drop below.
    is_withdrawable : bool
        Whether partial withdrawals are allowed at all.
    annual_rate : Decimal
        Annual rate in percent, 18.0-25.0 inclusive.
    interest_calculation : InterestCalculation
        How often interest would be credited.
    is_prolongable : bool
        Whether the deposit rolls over at the end of its term.

    Deposits are always replenishable, so ``is_replenishable`` is not an
    init argument.
    """

    account_type: ClassVar[AccountType] = AccountType.DEPOSIT

    term_months: int
    min_balance: Decimal
    is_withdrawable: bool
    annual_rate: Decimal
    interest_calculation: InterestCalculation
    is_prolongable: bool
    is_replenishable: bool = field(default=True, init=False)

    def __post_init__(self) -> None:
        if isinstance(self.term_months, bool) or not isinstance(self.term_months, int):
            raise ValidationError(f"deposit term must be a whole number of months, got {self.term_months!r}")
        if self.term_months < MIN_DEPOSIT_TERM_MONTHS:
            raise ValidationError(
                f"deposit term must be at least {MIN_DEPOSIT_TERM_MONTHS} months, got {self.term_months}"
            )

        for flag in ("is_withdrawable", "is_prolongable"):
            if not isinstance(getattr(self, flag), bool):
                raise ValidationError(f"{flag} must be a bool, got {getattr(self, flag)!r}")

        min_balance = to_money(self.min_balance, "min_balance")
        if min_balance < ZERO:
            raise ValidationError("minimum balance cannot be negative")

        rate = to_decimal(self.annual_rate, "annual_rate")
        if not MIN_DEPOSIT_RATE <= rate <= MAX_DEPOSIT_RATE:
            raise ValidationError(
                f"annual rate must be between {MIN_DEPOSIT_RATE} and {MAX_DEPOSIT_RATE}, got {rate}"
            )

        calculation = self.interest_calculation
        if not isinstance(calculation, InterestCalculation):
            try:
                calculation = InterestCalculation(str(calculation).upper())
            except ValueError as exc:
                raise ValidationError(f"unknown interest calculation {calculation!r}") from exc

        object.__setattr__(self, "min_balance", min_balance)
        object.__setattr__(self, "annual_rate", rate)
        object.__setattr__(self, "interest_calculation", calculation)

    def end_date(self, open_date: date) -> date:
        """Date the deposit term completes."""
        return add_months(open_date, self.term_months)

    def validate_opening(self, balance: Decimal) -> None:
        if balance < self.min_balance:
            raise BelowMinimumBalanceError(
                f"initial balance {balance} is below the minimum balance {self.min_balance}"
            )

    def allows_withdrawal(self, account: "Account", amount: Decimal) -> bool:
        if not self.is_withdrawable:
            return False
        return amount > ZERO and account.balance - amount >= self.min_balance

    def can_close(self, account: "Account", today: date) -> bool:
        return today >= self.end_date(account.open_date) and account.balance >= self.min_balance

    def describe(self, account: "Account") -> str:
        return (
            f"Deposit account {account.account_number}, balance: {account.balance}, "
            f"until {self.end_date(account.open_date).isoformat()}, rate: {self.annual_rate}%"
        )


@dataclass(frozen=True)
class CreditTerms:
    """Terms of a credit line; the balance is negative while credit is drawn."""

    account_type: ClassVar[AccountType] = AccountType.CREDIT

    credit_limit: Decimal
    credit_rate: Decimal
    credit_term: int  # months

    def __post_init__(self) -> None:
        limit = to_money(self.credit_limit, "credit_limit")
        if limit <= ZERO:
            raise InvalidCreditLimitError(f"credit limit must be positive, got {limit}")

        rate = to_decimal(self.credit_rate, "credit_rate")
        if rate <= 0:
            raise ValidationError(f"credit rate must be positive, got {rate}")

        if isinstance(self.credit_term, bool) or not isinstance(self.credit_term, int):
            raise ValidationError(f"credit term must be a whole number of months, got {self.credit_term!r}")
        if self.credit_term < 1:
            raise ValidationError(f"credit term must be at least 1 month, got {self.credit_term}")

        object.__setattr__(self, "credit_limit", limit)
        object.__setattr__(self, "credit_rate", rate)

    def available_credit(self, balance: Decimal) -> Decimal:
        return self.credit_limit + balance

    def validate_opening(self, balance: Decimal) -> None:
        if balance < -self.credit_limit:
            raise ConstraintViolationError(
                f"initial balance {balance} exceeds the credit limit {self.credit_limit}"
            )

    def allows_withdrawal(self, account: "Account", amount: Decimal) -> bool:
        return amount > ZERO and account.balance - amount >= -self.credit_limit

    def can_close(self, account: "Account", today: date) -> bool:
        return account.balance == ZERO

    def describe(self, account: "Account") -> str:
        return (
            f"Credit account {account.account_number}, balance: {account.balance}, "
            f"available: {self.available_credit(account.balance)}, limit: {self.credit_limit}"
        )


AccountTerms = CurrentTerms | DepositTerms | CreditTerms


@dataclass(eq=False)
class Account:
    """Bank account of any product type.

    ``owner`` and ``bank`` are references to registry entities, not copies.
    ``balance`` must only change through ``deposit`` and ``withdraw``.
    """

    account_number: str  # type prefix + token, e.g. CUR1A2B3C4D
    owner: Client
    bank: Bank
    terms: AccountTerms
    balance: Decimal = ZERO
    open_date: date = field(default_factory=date.today)
    close_date: date | None = None

    def __post_init__(self) -> None:
        if not self.account_number.startswith(self.account_type.prefix):
            raise ValidationError(
                f"account number {self.account_number} must start with {self.account_type.prefix}"
            )
        self.balance = to_money(self.balance, "balance")
        self.terms.validate_opening(self.balance)

    @property
    def account_type(self) -> AccountType:
        return self.terms.account_type

    @property
    def is_active(self) -> bool:
        return self.close_date is None

    @property
    def status(self) -> AccountStatus:
        return AccountStatus.ACTIVE if self.is_active else AccountStatus.CLOSED

    @property
    def end_date(self) -> date | None:
        """Term end for deposits, ``None`` for other account types."""
        if isinstance(self.terms, DepositTerms):
            return self.terms.end_date(self.open_date)
        return None

    @property
    def available_credit(self) -> Decimal | None:
        """Undrawn credit for credit accounts, ``None`` for other account types."""
        if isinstance(self.terms, CreditTerms):
            return self.terms.available_credit(self.balance)
        return None

    def is_term_completed(self, today: date | None = None) -> bool:
        """Check whether a deposit has reached its end date."""
        end = self.end_date
        return end is not None and (today or date.today()) >= end

    def deposit(self, amount: Decimal | int | float | str) -> None:
        """Add funds to the account.

        Raises
        ------
        InvalidAmountError
            If ``amount`` is not positive.
        ValidationError
            If ``amount`` is not a number or is finer than a cent.
        """
        value = to_money(amount)
        if value <= ZERO:
            raise InvalidAmountError(f"deposit amount must be positive, got {value}")
        self.balance += value

    def withdraw(self, amount: Decimal | int | float | str) -> bool:
        """Take funds out if the account's terms allow it.

        Returns ``False`` and leaves the balance untouched when the
        withdrawal is rejected. An amount finer than a cent raises
        ``ValidationError`` instead of being rounded.
        """
        value = to_money(amount)
        if not self.terms.allows_withdrawal(self, value):
            return False
        self.balance -= value
        return True

    def can_close(self, today: date | None = None) -> bool:
        return self.terms.can_close(self, today or date.today())

    def close(self, today: date | None = None) -> bool:
        """Mark the account closed if it is active and its close rule holds."""
        today = today or date.today()
        if not self.is_active or not self.can_close(today):
            return False
        self.close_date = today
        return True

    def describe(self) -> str:
        summary = self.terms.describe(self)
        if not self.is_active:
            summary += f" (closed {self.close_date.isoformat()})"
        return summary
