"""Bank model."""

from dataclasses import dataclass
from decimal import Decimal

from bank_ledger.exceptions import ValidationError
from bank_ledger.models.base import to_decimal

MIN_INTEREST_RATE = Decimal("0.1")
MAX_INTEREST_RATE = Decimal("2.0")


def check_bank_name(name: str, label: str = "name") -> None:
    """Raise ``ValidationError`` unless ``name`` is a non-blank string."""
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(f"bank {label} must not be blank")


@dataclass(frozen=True)
class Bank:
    """Financial institution holding client accounts.

    ``interest_rate`` is the percentage paid on current-account balances
    and must lie in [0.1, 2.0].
    """

    id: str
    full_name: str
    short_name: str
    interest_rate: Decimal

    def __post_init__(self) -> None:
        check_bank_name(self.full_name, "full name")
        check_bank_name(self.short_name, "short name")
        rate = to_decimal(self.interest_rate, "interest_rate")
        if not MIN_INTEREST_RATE <= rate <= MAX_INTEREST_RATE:
            raise ValidationError(
                f"interest rate must be between {MIN_INTEREST_RATE} and {MAX_INTEREST_RATE}, got {rate}"
            )
        object.__setattr__(self, "interest_rate", rate)

    def matches_name(self, name: str) -> bool:
        """Check ``name`` against the full or short name, ignoring case."""
        needle = name.strip().casefold()
        return needle in (self.full_name.strip().casefold(), self.short_name.strip().casefold())

    def __str__(self) -> str:
        return f"{self.short_name} ({self.full_name}) - {self.interest_rate}%"
