"""Registry of banks, clients and accounts with cross-entity constraints."""

import logging
import uuid
from collections.abc import Callable
from datetime import date
from decimal import Decimal

from bank_ledger.config import LedgerConfig
from bank_ledger.exceptions import (
    AccountLimitExceededError,
    DuplicateBankError,
    DuplicateClientError,
    DuplicateDepositAccountError,
    InvalidEntityStateError,
    UnregisteredEntityError,
)
from bank_ledger.models import (
    Account,
    AccountTerms,
    AccountType,
    Bank,
    Client,
    CreditTerms,
    CurrentTerms,
    DepositTerms,
    InterestCalculation,
)
from bank_ledger.models.bank import check_bank_name

logger = logging.getLogger(__name__)

Amount = Decimal | int | float | str


def default_account_token() -> str:
    """Return an 8-character upper-case hex token."""
    return uuid.uuid4().hex[:8].upper()


def default_entity_id() -> str:
    """Return a UUID4 hex string."""
    return uuid.uuid4().hex


class Registry:
    """Sole owner and writer of the bank, client and account collections.

    Parameters
    ----------
    config : LedgerConfig | None
        Account caps, number generation attempts and close behaviour.
    token_factory : Callable[[], str] | None
        Produces the part of an account number after the type prefix.
    id_factory : Callable[[], str] | None
        Produces bank and client ids.
    clock : Callable[[], date] | None
        Returns today's date; used for open dates and close checks.

    Every public accessor returns a new list, so callers cannot change
    the registry's collections. Checks run before anything is stored:
    a failed creation leaves the registry untouched.
    """

    def __init__(
        self,
        config: LedgerConfig | None = None,
        token_factory: Callable[[], str] | None = None,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], date] | None = None,
    ) -> None:
        self.config = config or LedgerConfig()
        self._token_factory = token_factory or default_account_token
        self._id_factory = id_factory or default_entity_id
        self._clock = clock or date.today

        # Primary entities
        self._banks: dict[str, Bank] = {}
        self._clients: dict[str, Client] = {}  # keyed by tax id
        self._accounts: dict[str, Account] = {}  # keyed by account number

        # Lookup and relationship indexes
        self._bank_names: dict[str, str] = {}  # casefolded name -> bank id
        self._client_accounts: dict[str, list[str]] = {}
        self._bank_accounts: dict[str, list[str]] = {}

    # Banks
    def add_bank(self, full_name: str, short_name: str, interest_rate: Amount) -> Bank:
        """Register a bank whose full and short names are both unused."""
        check_bank_name(full_name, "full name")
        check_bank_name(short_name, "short name")
        for name in (full_name, short_name):
            if self.find_bank_by_name(name) is not None:
                raise DuplicateBankError(f"Bank named {name.strip()!r} already exists")

        bank = Bank(
            id=self._id_factory(),
            full_name=full_name,
            short_name=short_name,
            interest_rate=interest_rate,
        )
        self._banks[bank.id] = bank
        self._bank_names[_name_key(bank.full_name)] = bank.id
        self._bank_names[_name_key(bank.short_name)] = bank.id
        self._bank_accounts[bank.id] = []
        logger.info("Registered bank %s", bank, extra={"bank": bank.short_name})
        return bank

    def find_bank_by_name(self, name: str) -> Bank | None:
        """Find a bank by full or short name, ignoring case."""
        bank_id = self._bank_names.get(_name_key(name))
        return self._banks[bank_id] if bank_id is not None else None

    def all_banks(self) -> list[Bank]:
        return list(self._banks.values())

    # Clients
    def add_client(
        self,
        full_name: str,
        tax_id: str,
        passport_number: str,
        passport_series: str,
    ) -> Client:
        """Register a client whose tax id is not yet known."""
        if tax_id in self._clients:
            raise DuplicateClientError(f"Client with tax id {tax_id} already exists")

        client = Client(
            id=self._id_factory(),
            full_name=full_name,
            tax_id=tax_id,
            passport_number=passport_number,
            passport_series=passport_series,
        )
        self._clients[client.tax_id] = client
        self._client_accounts[client.id] = []
        logger.info("Registered client %s", client.id, extra={"client_id": client.id})
        return client

    def find_client_by_tax_id(self, tax_id: str) -> Client | None:
        return self._clients.get(tax_id)

    def all_clients(self) -> list[Client]:
        return list(self._clients.values())

    # Accounts
    def open_current_account(
        self,
        client: Client,
        bank: Bank,
        initial_balance: Amount = 0,
    ) -> Account:
        """Open a current account.

        Raises
        ------
        UnregisteredEntityError
            If the client or bank is not registered.
        AccountLimitExceededError
            If the client already holds the maximum number of active
            current accounts at ``bank``.
        """
        self._require_registered(client, bank)
        held = self._count_active(client, bank, AccountType.CURRENT)
        if held >= self.config.max_current_accounts_per_bank:
            raise AccountLimitExceededError(
                f"Client {client.id} already holds {held} current accounts at {bank.short_name}"
            )
        return self._open(client, bank, CurrentTerms(), initial_balance)

    def open_deposit_account(
        self,
        client: Client,
        bank: Bank,
        initial_balance: Amount,
        term_months: int,
        min_balance: Amount,
        is_withdrawable: bool,
        annual_rate: Amount,
        interest_calculation: InterestCalculation,
        is_prolongable: bool,
    ) -> Account:
        """Open a replenishable term deposit.

        Raises
        ------
        UnregisteredEntityError
            If the client or bank is not registered.
        DuplicateDepositAccountError
            If the client already holds an active deposit at ``bank``.
        BelowMinimumBalanceError
            If ``initial_balance`` is below ``min_balance``.
        ValidationError
            If the term or rate is out of range.
        """
        self._require_registered(client, bank)
        held = self._count_active(client, bank, AccountType.DEPOSIT)
        if held >= self.config.max_deposit_accounts_per_bank:
            raise DuplicateDepositAccountError(
                f"Client {client.id} already holds a deposit account at {bank.short_name}"
            )
        terms = DepositTerms(
            term_months=term_months,
            min_balance=min_balance,
            is_withdrawable=is_withdrawable,
            annual_rate=annual_rate,
            interest_calculation=interest_calculation,
            is_prolongable=is_prolongable,
        )
        return self._open(client, bank, terms, initial_balance)

    def open_credit_account(
        self,
        client: Client,
        bank: Bank,
        credit_limit: Amount,
        credit_rate: Amount,
        credit_term: int,
        initial_balance: Amount = 0,
    ) -> Account:
        """Open a credit line.

        Raises
        ------
        UnregisteredEntityError
            If the client or bank is not registered.
        InvalidCreditLimitError
            If ``credit_limit`` is not positive.
        """
        self._require_registered(client, bank)
        terms = CreditTerms(
            credit_limit=credit_limit,
            credit_rate=credit_rate,
            credit_term=credit_term,
        )
        return self._open(client, bank, terms, initial_balance)

    def find_account(self, account_number: str) -> Account | None:
        return self._accounts.get(account_number)

    def all_accounts(self) -> list[Account]:
        return list(self._accounts.values())

    def accounts_for_client(self, client: Client) -> list[Account]:
        """Get all accounts owned by a client."""
        numbers = self._client_accounts.get(client.id, [])
        return [self._accounts[n] for n in numbers]

    def accounts_for_bank(self, bank: Bank) -> list[Account]:
        """Get all accounts held at a bank."""
        numbers = self._bank_accounts.get(bank.id, [])
        return [self._accounts[n] for n in numbers]

    def accounts_for_client_at_bank(self, client: Client, bank: Bank) -> list[Account]:
        """Get a client's accounts at one bank."""
        return [a for a in self.accounts_for_client(client) if a.bank.id == bank.id]

    # Operations
    def deposit_to(self, account_number: str, amount: Amount) -> bool:
        """Deposit into an active account.

        Returns ``False`` if the account is unknown or closed. A non-positive
        amount raises ``InvalidAmountError``.
        """
        account = self._active_account(account_number)
        if account is None:
            return False
        account.deposit(amount)
        logger.debug(
            "Deposited %s to %s",
            amount,
            account_number,
            extra={"account_number": account_number, "amount": amount},
        )
        return True

    def withdraw_from(self, account_number: str, amount: Amount) -> bool:
        """Withdraw from an active account, returning the account's verdict."""
        account = self._active_account(account_number)
        if account is None:
            return False
        if not account.withdraw(amount):
            logger.debug(
                "Withdrawal of %s from %s rejected",
                amount,
                account_number,
                extra={"account_number": account_number, "amount": amount},
            )
            return False
        logger.debug(
            "Withdrew %s from %s",
            amount,
            account_number,
            extra={"account_number": account_number, "amount": amount},
        )
        return True

    def close_account(self, account_number: str) -> bool:
        """Close an active account whose close rule holds.

        With ``config.close_sets_close_date`` off, the account is left
        active and the call only reports whether it could be closed.
        """
        account = self._active_account(account_number)
        if account is None:
            return False
        today = self._clock()
        if not account.can_close(today):
            logger.debug(
                "Account %s cannot be closed yet", account_number, extra={"account_number": account_number}
            )
            return False
        if self.config.close_sets_close_date:
            account.close(today)
            logger.info("Closed account %s", account_number, extra={"account_number": account_number})
        return True

    # Statistics
    def total_accounts(self) -> int:
        return len(self._accounts)

    def active_accounts(self) -> int:
        return sum(1 for a in self._accounts.values() if a.is_active)

    def total_balance(self) -> Decimal:
        return sum((a.balance for a in self._accounts.values()), Decimal("0.00"))

    def summary(self) -> dict[str, int | Decimal]:
        """Return entity counts and the total balance."""
        return {
            "banks": len(self._banks),
            "clients": len(self._clients),
            "accounts": self.total_accounts(),
            "active_accounts": self.active_accounts(),
            "total_balance": self.total_balance(),
        }

    # Helpers
    def _require_registered(self, client: Client, bank: Bank) -> None:
        if self._clients.get(client.tax_id) != client:
            raise UnregisteredEntityError(f"Client {client.id} is not registered")
        if self._banks.get(bank.id) != bank:
            raise UnregisteredEntityError(f"Bank {bank.short_name} is not registered")

    def _count_active(self, client: Client, bank: Bank, account_type: AccountType) -> int:
        return sum(
            1
            for a in self.accounts_for_client_at_bank(client, bank)
            if a.account_type == account_type and a.is_active
        )

    def _active_account(self, account_number: str) -> Account | None:
        account = self._accounts.get(account_number)
        if account is None:
            logger.debug("Account %s not found", account_number, extra={"account_number": account_number})
            return None
        if not account.is_active:
            logger.debug("Account %s is closed", account_number, extra={"account_number": account_number})
            return None
        return account

    def _next_account_number(self, account_type: AccountType) -> str:
        for _ in range(self.config.account_number_max_attempts):
            number = f"{account_type.prefix}{self._token_factory()}"
            if number not in self._accounts:
                return number
            logger.warning(
                "Account number %s already taken, retrying",
                number,
                extra={"account_number": number, "account_type": account_type.value},
            )
        raise InvalidEntityStateError(
            f"No free {account_type.value} account number after "
            f"{self.config.account_number_max_attempts} attempts"
        )

    def _open(
        self,
        client: Client,
        bank: Bank,
        terms: AccountTerms,
        initial_balance: Amount,
    ) -> Account:
        account = Account(
            account_number=self._next_account_number(terms.account_type),
            owner=client,
            bank=bank,
            terms=terms,
            balance=initial_balance,
            open_date=self._clock(),
        )
        self._accounts[account.account_number] = account
        self._client_accounts[client.id].append(account.account_number)
        self._bank_accounts[bank.id].append(account.account_number)
        logger.info(
            "Opened %s account %s for client %s at %s",
            account.account_type.value.lower(),
            account.account_number,
            client.id,
            bank.short_name,
            extra={
                "account_number": account.account_number,
                "account_type": account.account_type.value,
                "client_id": client.id,
                "bank": bank.short_name,
                "amount": account.balance,
            },
        )
        return account


def _name_key(name: str) -> str:
    return name.strip().casefold()
