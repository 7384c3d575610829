"""Client model."""

from dataclasses import dataclass

from bank_ledger.exceptions import ValidationError
from bank_ledger.models.base import is_digits

MIN_NAME_LENGTH = 5
TAX_ID_LENGTH = 12
PASSPORT_NUMBER_LENGTH = 6
PASSPORT_SERIES_LENGTH = 4


@dataclass(frozen=True)
class Client:
    """Natural person holding accounts."""

    id: str
    full_name: str
    tax_id: str  # 12 digits, leading zeros allowed
    passport_number: str  # 6 digits
    passport_series: str  # 4 digits

    def __post_init__(self) -> None:
        if not isinstance(self.full_name, str) or len(self.full_name.strip()) < MIN_NAME_LENGTH:
            raise ValidationError(
                f"client full name must have at least {MIN_NAME_LENGTH} characters"
            )
        if not is_digits(self.tax_id, TAX_ID_LENGTH):
            raise ValidationError(f"tax id must be exactly {TAX_ID_LENGTH} digits")
        if not is_digits(self.passport_number, PASSPORT_NUMBER_LENGTH):
            raise ValidationError(
                f"passport number must be exactly {PASSPORT_NUMBER_LENGTH} digits"
            )
        if not is_digits(self.passport_series, PASSPORT_SERIES_LENGTH):
            raise ValidationError(
                f"passport series must be exactly {PASSPORT_SERIES_LENGTH} digits"
            )

    def __str__(self) -> str:
        return f"{self.full_name} (tax id: {self.tax_id})"
