"""Tests for the Registry: uniqueness, account caps, lookups and operations."""

import itertools
from datetime import date
from decimal import Decimal

import pytest

from bank_ledger.config import LedgerConfig
from bank_ledger.exceptions import (
    AccountLimitExceededError,
    BelowMinimumBalanceError,
    DuplicateBankError,
    DuplicateClientError,
    DuplicateDepositAccountError,
    DuplicateEntityError,
    InvalidAmountError,
    InvalidCreditLimitError,
    InvalidEntityStateError,
    UnregisteredEntityError,
    ValidationError,
)
from bank_ledger.models import AccountType, Bank, Client, InterestCalculation
from bank_ledger.store.registry import Registry, default_account_token


def open_deposit(registry: Registry, client: Client, bank: Bank, **overrides: object):
    params: dict[str, object] = {
        "initial_balance": 1000,
        "term_months": 3,
        "min_balance": 1000,
        "is_withdrawable": True,
        "annual_rate": 20,
        "interest_calculation": InterestCalculation.MONTHLY,
        "is_prolongable": False,
    }
    params.update(overrides)
    return registry.open_deposit_account(client, bank, **params)  # type: ignore[arg-type]


class TestRegistryBanks:
    """Tests for bank registration and lookup."""

    def test_add_bank(self, registry: Registry) -> None:
        bank = registry.add_bank("Alpha Bank", "Alpha", 1.0)

        assert bank.id == "id-0001"
        assert bank.interest_rate == Decimal("1.0")
        assert registry.all_banks() == [bank]

    @pytest.mark.parametrize("short_name", ["Alpha", "ALPHA", "alpha"])
    def test_duplicate_short_name_any_case(self, registry: Registry, bank: Bank, short_name: str) -> None:
        with pytest.raises(DuplicateEntityError):
            registry.add_bank("Another Bank", short_name, 1.5)

        assert registry.all_banks() == [bank]

    def test_duplicate_across_fields(self, registry: Registry, bank: Bank) -> None:
        # New short name equals the existing full name
        with pytest.raises(DuplicateBankError):
            registry.add_bank("Gamma Bank", "alpha bank", 1.5)

    def test_invalid_bank_not_stored(self, registry: Registry) -> None:
        with pytest.raises(ValidationError):
            registry.add_bank("Broken Bank", "Broken", 2.01)

        assert registry.all_banks() == []
        assert registry.find_bank_by_name("Broken") is None

    @pytest.mark.parametrize(
        "full_name, short_name",
        [(None, "Broken"), ("Broken Bank", None), ("Broken Bank", "   ")],
    )
    def test_missing_name_is_validation_error(
        self, registry: Registry, bank: Bank, full_name: object, short_name: object
    ) -> None:
        with pytest.raises(ValidationError, match="must not be blank"):
            registry.add_bank(full_name, short_name, 1.0)  # type: ignore[arg-type]

        assert registry.all_banks() == [bank]

    def test_find_bank_by_name(self, registry: Registry, bank: Bank) -> None:
        assert registry.find_bank_by_name("alpha bank") is bank
        assert registry.find_bank_by_name("ALPHA") is bank
        assert registry.find_bank_by_name("Beta") is None

    def test_all_banks_is_snapshot(self, registry: Registry, bank: Bank) -> None:
        registry.all_banks().clear()
        assert registry.all_banks() == [bank]


class TestRegistryClients:
    """Tests for client registration and lookup."""

    def test_add_client(self, registry: Registry) -> None:
        client = registry.add_client("Jane Q Public", "123456789012", "123456", "1234")

        assert registry.find_client_by_tax_id("123456789012") is client
        assert registry.all_clients() == [client]

    def test_duplicate_tax_id(self, registry: Registry, client: Client) -> None:
        with pytest.raises(DuplicateClientError, match="123456789012"):
            registry.add_client("Someone Else", "123456789012", "654321", "4321")

        assert registry.all_clients() == [client]

    def test_invalid_client_not_stored(self, registry: Registry) -> None:
        with pytest.raises(ValidationError):
            registry.add_client("Jane Q Public", "12345", "123456", "1234")

        assert registry.find_client_by_tax_id("12345") is None

    def test_find_missing_client(self, registry: Registry) -> None:
        assert registry.find_client_by_tax_id("000000000000") is None


class TestRegistryCurrentAccounts:
    """Tests for opening current accounts."""

    def test_account_number_prefix(self, registry: Registry, client: Client, bank: Bank) -> None:
        account = registry.open_current_account(client, bank, 500)

        assert account.account_number == "CUR00000001"
        assert account.account_type == AccountType.CURRENT
        assert account.open_date == date(2024, 1, 31)
        assert registry.find_account("CUR00000001") is account

    def test_fourth_current_account_rejected(self, registry: Registry, client: Client, bank: Bank) -> None:
        for _ in range(3):
            registry.open_current_account(client, bank)

        with pytest.raises(AccountLimitExceededError):
            registry.open_current_account(client, bank)
        assert registry.total_accounts() == 3

    def test_cap_is_per_bank(self, registry: Registry, client: Client, bank: Bank) -> None:
        other = registry.add_bank("Beta Bank", "Beta", 0.5)
        for _ in range(3):
            registry.open_current_account(client, bank)

        assert registry.open_current_account(client, other).bank is other

    def test_closed_accounts_free_a_slot(self, registry: Registry, client: Client, bank: Bank) -> None:
        accounts = [registry.open_current_account(client, bank) for _ in range(3)]
        assert registry.close_account(accounts[0].account_number) is True

        registry.open_current_account(client, bank)
        assert registry.total_accounts() == 4

    def test_configurable_cap(self, single_current_registry: Registry) -> None:
        registry = single_current_registry
        bank = registry.add_bank("Alpha Bank", "Alpha", 1.0)
        client = registry.add_client("Jane Q Public", "123456789012", "123456", "1234")
        registry.open_current_account(client, bank)

        with pytest.raises(AccountLimitExceededError):
            registry.open_current_account(client, bank)

    def test_unregistered_client(self, registry: Registry, bank: Bank, sample_client: Client) -> None:
        with pytest.raises(UnregisteredEntityError, match="Client"):
            registry.open_current_account(sample_client, bank)
        assert registry.total_accounts() == 0

    def test_unregistered_bank(self, registry: Registry, client: Client, sample_bank: Bank) -> None:
        with pytest.raises(UnregisteredEntityError, match="Bank"):
            registry.open_current_account(client, sample_bank)

    def test_lookalike_bank_is_unregistered(self, registry: Registry, client: Client, bank: Bank) -> None:
        lookalike = Bank(id="other-id", full_name=bank.full_name, short_name=bank.short_name, interest_rate=1.0)

        with pytest.raises(UnregisteredEntityError):
            registry.open_current_account(client, lookalike)


class TestRegistryDepositAccounts:
    """Tests for opening deposit accounts."""

    def test_open_deposit(self, registry: Registry, client: Client, bank: Bank) -> None:
        account = open_deposit(registry, client, bank)

        assert account.account_number.startswith("DEP")
        assert account.terms.is_replenishable is True
        assert account.balance == Decimal("1000.00")

    def test_second_deposit_same_bank_rejected(self, registry: Registry, client: Client, bank: Bank) -> None:
        open_deposit(registry, client, bank)

        with pytest.raises(DuplicateDepositAccountError):
            open_deposit(registry, client, bank)
        assert registry.total_accounts() == 1

    def test_deposit_at_other_bank(self, registry: Registry, client: Client, bank: Bank) -> None:
        other = registry.add_bank("Beta Bank", "Beta", 0.5)
        open_deposit(registry, client, bank)

        assert open_deposit(registry, client, other).bank is other

    def test_one_cent_below_minimum(self, registry: Registry, client: Client, bank: Bank) -> None:
        with pytest.raises(BelowMinimumBalanceError):
            open_deposit(registry, client, bank, initial_balance="999.99")
        assert registry.total_accounts() == 0

    def test_invalid_terms_not_stored(self, registry: Registry, client: Client, bank: Bank) -> None:
        with pytest.raises(ValidationError):
            open_deposit(registry, client, bank, annual_rate=30)
        assert registry.all_accounts() == []

    def test_not_withdrawable(self, registry: Registry, client: Client, bank: Bank) -> None:
        account = open_deposit(registry, client, bank, initial_balance=2000, is_withdrawable=False)

        assert registry.withdraw_from(account.account_number, 10) is False
        assert account.balance == Decimal("2000.00")


class TestRegistryCreditAccounts:
    """Tests for opening credit accounts."""

    def test_open_credit(self, registry: Registry, client: Client, bank: Bank) -> None:
        account = registry.open_credit_account(client, bank, 1000, 12.5, 24)

        assert account.account_number.startswith("CRD")
        assert account.available_credit == Decimal("1000.00")

    def test_invalid_credit_limit(self, registry: Registry, client: Client, bank: Bank) -> None:
        with pytest.raises(InvalidCreditLimitError):
            registry.open_credit_account(client, bank, 0, 12.5, 24)
        assert registry.total_accounts() == 0

    def test_credit_limit_flow(self, registry: Registry, client: Client, bank: Bank) -> None:
        account = registry.open_credit_account(client, bank, 1000, 12.5, 24)

        assert registry.withdraw_from(account.account_number, 1000) is True
        assert registry.withdraw_from(account.account_number, "0.01") is False
        assert account.balance == Decimal("-1000.00")
        assert account.available_credit == Decimal("0.00")

    def test_no_cap_on_credit_accounts(self, registry: Registry, client: Client, bank: Bank) -> None:
        for _ in range(4):
            registry.open_credit_account(client, bank, 500, 10, 12)
        assert registry.total_accounts() == 4


class TestRegistryOperations:
    """Tests for deposit, withdraw and close by account number."""

    def test_unknown_account(self, registry: Registry) -> None:
        assert registry.find_account("CUR99999999") is None
        assert registry.deposit_to("CUR99999999", 10) is False
        assert registry.withdraw_from("CUR99999999", 10) is False
        assert registry.close_account("CUR99999999") is False

    def test_deposit_invalid_amount_propagates(self, registry: Registry, client: Client, bank: Bank) -> None:
        account = registry.open_current_account(client, bank)

        with pytest.raises(InvalidAmountError):
            registry.deposit_to(account.account_number, 0)

    def test_sub_cent_amounts_rejected(self, registry: Registry, client: Client, bank: Bank) -> None:
        account = registry.open_current_account(client, bank, 100)

        with pytest.raises(ValidationError, match="whole number of cents"):
            registry.withdraw_from(account.account_number, Decimal("0.005"))
        with pytest.raises(ValidationError, match="whole number of cents"):
            registry.deposit_to(account.account_number, Decimal("0.004"))
        assert account.balance == Decimal("100.00")

    def test_cent_amounts_move_exactly(self, registry: Registry, client: Client, bank: Bank) -> None:
        account = registry.open_current_account(client, bank, 100)

        assert registry.withdraw_from(account.account_number, Decimal("0.01")) is True
        assert registry.deposit_to(account.account_number, "0.02") is True
        assert account.balance == Decimal("100.01")

    def test_closed_account_rejects_operations(self, registry: Registry, client: Client, bank: Bank) -> None:
        account = registry.open_current_account(client, bank)
        assert registry.close_account(account.account_number) is True

        assert account.close_date == date(2024, 1, 31)
        assert registry.deposit_to(account.account_number, 10) is False
        assert registry.withdraw_from(account.account_number, 10) is False
        assert registry.close_account(account.account_number) is False
        assert account.balance == Decimal("0.00")

    def test_close_refused_with_balance(self, registry: Registry, client: Client, bank: Bank) -> None:
        account = registry.open_current_account(client, bank, 10)

        assert registry.close_account(account.account_number) is False
        assert account.is_active

    def test_close_deposit_before_term(self, registry: Registry, client: Client, bank: Bank) -> None:
        account = open_deposit(registry, client, bank)
        assert registry.close_account(account.account_number) is False

    def test_close_check_only_mode(self, today: date) -> None:
        registry = Registry(config=LedgerConfig(close_sets_close_date=False), clock=lambda: today)
        bank = registry.add_bank("Alpha Bank", "Alpha", 1.0)
        client = registry.add_client("Jane Q Public", "123456789012", "123456", "1234")
        account = registry.open_current_account(client, bank)

        assert registry.close_account(account.account_number) is True
        assert account.is_active
        assert account.close_date is None


class TestRegistryQueries:
    """Tests for aggregate queries."""

    def test_statistics(self, registry: Registry, client: Client, bank: Bank) -> None:
        first = registry.open_current_account(client, bank, 100)
        registry.open_current_account(client, bank)
        registry.open_credit_account(client, bank, 1000, 10, 12, initial_balance=-250)
        registry.close_account(registry.accounts_for_client(client)[1].account_number)

        assert registry.total_accounts() == 3
        assert registry.active_accounts() == 2
        assert registry.total_balance() == Decimal("-150.00")
        assert registry.summary() == {
            "banks": 1,
            "clients": 1,
            "accounts": 3,
            "active_accounts": 2,
            "total_balance": Decimal("-150.00"),
        }
        assert first.is_active

    def test_empty_statistics(self, registry: Registry) -> None:
        assert registry.total_accounts() == 0
        assert registry.active_accounts() == 0
        assert registry.total_balance() == Decimal("0.00")

    def test_accounts_by_client_and_bank(self, registry: Registry, client: Client, bank: Bank) -> None:
        other_bank = registry.add_bank("Beta Bank", "Beta", 0.5)
        other_client = registry.add_client("John Doe Smith", "000000000001", "654321", "4321")

        a1 = registry.open_current_account(client, bank)
        a2 = registry.open_current_account(client, other_bank)
        a3 = registry.open_current_account(other_client, bank)

        assert registry.accounts_for_client(client) == [a1, a2]
        assert registry.accounts_for_bank(bank) == [a1, a3]
        assert registry.accounts_for_client_at_bank(client, other_bank) == [a2]
        assert registry.all_accounts() == [a1, a2, a3]

    def test_queries_for_unknown_entities(self, registry: Registry, sample_client: Client, sample_bank: Bank) -> None:
        assert registry.accounts_for_client(sample_client) == []
        assert registry.accounts_for_bank(sample_bank) == []


class TestAccountNumbers:
    """Tests for account number generation."""

    def test_default_token(self) -> None:
        token = default_account_token()

        assert len(token) == 8
        assert token == token.upper()
        assert all(c in "0123456789ABCDEF" for c in token)

    def test_collision_is_retried(self, client: Client, bank: Bank, registry: Registry) -> None:
        tokens = iter(["AAAAAAAA", "AAAAAAAA", "BBBBBBBB"])
        registry._token_factory = lambda: next(tokens)

        first = registry.open_current_account(client, bank)
        second = registry.open_current_account(client, bank)

        assert first.account_number == "CURAAAAAAAA"
        assert second.account_number == "CURBBBBBBBB"

    def test_same_token_different_type(self, client: Client, bank: Bank, registry: Registry) -> None:
        registry._token_factory = lambda: "AAAAAAAA"

        registry.open_current_account(client, bank)
        assert registry.open_credit_account(client, bank, 100, 5, 6).account_number == "CRDAAAAAAAA"

    def test_exhausted_attempts(self, today: date) -> None:
        registry = Registry(
            config=LedgerConfig(account_number_max_attempts=2),
            token_factory=lambda: "SAMESAME",
            clock=lambda: today,
        )
        bank = registry.add_bank("Alpha Bank", "Alpha", 1.0)
        client = registry.add_client("Jane Q Public", "123456789012", "123456", "1234")
        registry.open_current_account(client, bank)

        with pytest.raises(InvalidEntityStateError, match="2 attempts"):
            registry.open_current_account(client, bank)
        assert registry.total_accounts() == 1


class TestEndToEnd:
    """Full flow through the registry."""

    def test_current_account_flow(self) -> None:
        registry = Registry()
        bank = registry.add_bank("Alpha Bank", "Alpha", 1.0)
        client = registry.add_client("Jane Q Public", "123456789012", "123456", "1234")

        account = registry.open_current_account(client, bank, 500)
        number = account.account_number
        assert number.startswith("CUR")
        assert len(number) == 11

        assert registry.deposit_to(number, 200) is True
        assert account.balance == Decimal("700.00")

        assert registry.withdraw_from(number, 1000) is False
        assert account.balance == Decimal("700.00")

        assert registry.withdraw_from(number, 700) is True
        assert account.balance == Decimal("0.00")
        assert account.can_close() is True


@pytest.fixture
def single_current_registry(today: date) -> Registry:
    """Registry allowing a single current account per bank."""
    ids = itertools.count(1)
    return Registry(
        config=LedgerConfig(max_current_accounts_per_bank=1),
        id_factory=lambda: f"id-{next(ids):04d}",
        clock=lambda: today,
    )
