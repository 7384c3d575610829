"""Sample ledger scenario: banks, clients, accounts and some activity."""

import logging
import random
from decimal import Decimal

from bank_ledger.config import SeedConfig
from bank_ledger.exceptions import DuplicateBankError, DuplicateClientError
from bank_ledger.generators import AccountTermsGenerator, BankGenerator, ClientGenerator
from bank_ledger.models import Account, Bank, Client
from bank_ledger.store.registry import Registry

logger = logging.getLogger(__name__)

# Generated names and tax ids can collide; give up after this many tries per entity
MAX_ATTEMPTS_PER_ENTITY = 5


class SampleLedgerScenario:
    """Populate a registry through its public operations.

    Every entity goes through the same checks a real caller would hit, so
    the result always satisfies the registry's invariants:
    - 1-2 current accounts per client at one bank
    - a deposit for ``deposit_penetration`` of clients
    - a credit line for ``credit_penetration`` of clients
    - ``operations_per_account`` random deposits and withdrawals
    """

    def __init__(
        self,
        config: SeedConfig | None = None,
        registry: Registry | None = None,
        seed: int | None = None,
    ) -> None:
        self.config = config or SeedConfig()
        self.registry = registry or Registry()
        self.seed = seed

        if seed is not None:
            random.seed(seed)

        self._bank_gen = BankGenerator(seed=seed, locale=self.config.locale)
        self._client_gen = ClientGenerator(seed=seed, locale=self.config.locale)
        self._terms_gen = AccountTermsGenerator(seed=seed, locale=self.config.locale)
        self.stats: dict[str, int] = {
            "deposits": 0,
            "withdrawals": 0,
            "rejected_withdrawals": 0,
        }

    def generate(self) -> Registry:
        """Generate all data for the scenario.

        Returns
        -------
        Registry
            Registry containing the generated data.
        """
        logger.info(
            "Starting sample ledger scenario: %d banks, %d clients",
            self.config.num_banks,
            self.config.num_clients,
        )

        banks = self._register_banks()
        clients = self._register_clients()
        if banks:
            for client in clients:
                for account in self._open_accounts(client, banks):
                    self._simulate_activity(account)

        summary = self.registry.summary()
        logger.info(
            "Generated ledger: %d banks, %d clients, %d accounts, total balance %s",
            summary["banks"],
            summary["clients"],
            summary["accounts"],
            summary["total_balance"],
        )
        return self.registry

    def _register_banks(self) -> list[Bank]:
        banks: list[Bank] = []
        for _ in range(self.config.num_banks * MAX_ATTEMPTS_PER_ENTITY):
            if len(banks) == self.config.num_banks:
                break
            app = self._bank_gen.generate()
            try:
                banks.append(
                    self.registry.add_bank(app.full_name, app.short_name, app.interest_rate)
                )
            except DuplicateBankError as exc:
                logger.debug("Skipping generated bank: %s", exc)
        return banks

    def _register_clients(self) -> list[Client]:
        clients: list[Client] = []
        for _ in range(self.config.num_clients * MAX_ATTEMPTS_PER_ENTITY):
            if len(clients) == self.config.num_clients:
                break
            app = self._client_gen.generate()
            try:
                clients.append(
                    self.registry.add_client(
                        app.full_name,
                        app.tax_id,
                        app.passport_number,
                        app.passport_series,
                    )
                )
            except DuplicateClientError as exc:
                logger.debug("Skipping generated client: %s", exc)
        return clients

    def _open_accounts(self, client: Client, banks: list[Bank]) -> list[Account]:
        accounts: list[Account] = []
        home_bank = random.choice(banks)
        num_current = min(
            random.choices([1, 2], weights=[0.7, 0.3], k=1)[0],
            self.registry.config.max_current_accounts_per_bank,
        )
        for _ in range(num_current):
            accounts.append(
                self.registry.open_current_account(
                    client, home_bank, self._terms_gen.current_balance()
                )
            )

        if random.random() < self.config.deposit_penetration:
            offer = self._terms_gen.deposit_offer()
            accounts.append(
                self.registry.open_deposit_account(
                    client,
                    random.choice(banks),
                    offer.initial_balance,
                    offer.term_months,
                    offer.min_balance,
                    offer.is_withdrawable,
                    offer.annual_rate,
                    offer.interest_calculation,
                    offer.is_prolongable,
                )
            )

        if random.random() < self.config.credit_penetration:
            offer = self._terms_gen.credit_offer()
            accounts.append(
                self.registry.open_credit_account(
                    client,
                    random.choice(banks),
                    offer.credit_limit,
                    offer.credit_rate,
                    offer.credit_term,
                )
            )
        return accounts

    def _simulate_activity(self, account: Account) -> None:
        for _ in range(self.config.operations_per_account):
            amount = Decimal(str(round(random.uniform(1, 2000), 2)))
            if random.random() < 0.5:
                self.registry.deposit_to(account.account_number, amount)
                self.stats["deposits"] += 1
            elif self.registry.withdraw_from(account.account_number, amount):
                self.stats["withdrawals"] += 1
            else:
                self.stats["rejected_withdrawals"] += 1
