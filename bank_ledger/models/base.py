"""Value helpers shared across ledger models."""

import calendar
from datetime import date
from decimal import Decimal, InvalidOperation

from bank_ledger.exceptions import ValidationError

CENT = Decimal("0.01")


def to_decimal(value: Decimal | int | float | str, field_name: str = "value") -> Decimal:
    """Convert a numeric input to ``Decimal`` without float artefacts."""
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number, got {value!r}")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"{field_name} must be a number, got {value!r}") from exc
    if not result.is_finite():
        raise ValidationError(f"{field_name} must be finite, got {value!r}")
    return result


def to_money(value: Decimal | int | float | str, field_name: str = "amount") -> Decimal:
    """Convert a numeric input to a ``Decimal`` with exactly two places.

    Amounts finer than a cent are rejected rather than rounded, so the
    value checked by the account rules is the value that moves.
    """
    result = to_decimal(value, field_name)
    try:
        cents = result.quantize(CENT)
    except InvalidOperation as exc:
        raise ValidationError(f"{field_name} is out of range, got {value!r}") from exc
    if cents != result:
        raise ValidationError(f"{field_name} must be a whole number of cents, got {value!r}")
    return cents


def add_months(start: date, months: int) -> date:
    """Shift a date by whole calendar months, clamping to the last day of the month."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def is_digits(value: str, length: int) -> bool:
    """Check that ``value`` is exactly ``length`` ASCII digits."""
    return (
        isinstance(value, str)
        and len(value) == length
        and value.isascii()
        and value.isdigit()
    )
