"""Configuration management for bank-ledger."""

from dataclasses import dataclass, field

from bank_ledger.exceptions import ConfigurationError


@dataclass
class LedgerConfig:
    """Registry rules that are policy rather than entity validation."""

    max_current_accounts_per_bank: int = 3
    max_deposit_accounts_per_bank: int = 1
    account_number_max_attempts: int = 10
    # When False, closing only acknowledges that the close rule holds
    close_sets_close_date: bool = True

    def __post_init__(self) -> None:
        if self.max_current_accounts_per_bank < 1:
            raise ConfigurationError("max_current_accounts_per_bank must be at least 1")
        if self.max_deposit_accounts_per_bank < 1:
            raise ConfigurationError("max_deposit_accounts_per_bank must be at least 1")
        if self.account_number_max_attempts < 1:
            raise ConfigurationError("account_number_max_attempts must be at least 1")


@dataclass
class SeedConfig:
    """Configuration for sample ledger generation."""

    num_banks: int = 3
    num_clients: int = 10
    locale: str = "en_US"
    operations_per_account: int = 5
    deposit_penetration: float = 0.4
    credit_penetration: float = 0.3


@dataclass
class AppConfig:
    """Main configuration for bank-ledger."""

    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    seeding: SeedConfig = field(default_factory=SeedConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create config from environment variables."""
        import os

        def _int(name: str, default: str) -> int:
            raw = os.getenv(name, default)
            try:
                return int(raw)
            except ValueError as exc:
                raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc

        def _float(name: str, default: str) -> float:
            raw = os.getenv(name, default)
            try:
                return float(raw)
            except ValueError as exc:
                raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc

        ledger = LedgerConfig(
            max_current_accounts_per_bank=_int("LEDGER_MAX_CURRENT_ACCOUNTS", "3"),
            max_deposit_accounts_per_bank=_int("LEDGER_MAX_DEPOSIT_ACCOUNTS", "1"),
            account_number_max_attempts=_int("LEDGER_ACCOUNT_NUMBER_ATTEMPTS", "10"),
            close_sets_close_date=os.getenv("LEDGER_CLOSE_SETS_DATE", "true").lower() == "true",
        )

        seeding = SeedConfig(
            num_banks=_int("LEDGER_SEED_BANKS", "3"),
            num_clients=_int("LEDGER_SEED_CLIENTS", "10"),
            locale=os.getenv("LEDGER_SEED_LOCALE", "en_US"),
            operations_per_account=_int("LEDGER_SEED_OPERATIONS", "5"),
            deposit_penetration=_float("LEDGER_SEED_DEPOSIT_PENETRATION", "0.4"),
            credit_penetration=_float("LEDGER_SEED_CREDIT_PENETRATION", "0.3"),
        )

        return cls(
            ledger=ledger,
            seeding=seeding,
            seed=_int("LEDGER_SEED", "0") if os.getenv("LEDGER_SEED") else None,
            log_level=os.getenv("LEDGER_LOG_LEVEL", "INFO"),
            log_format=os.getenv("LEDGER_LOG_FORMAT", "standard"),
        )
