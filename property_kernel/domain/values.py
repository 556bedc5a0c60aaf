"""Decimal coercion and rounding helpers shared by domain values and engines."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

CENTS = Decimal("0.01")
WHOLE = Decimal("1")


def as_decimal(value: Any, field: str = "value") -> Decimal:
    """
    Coerce ``value`` to Decimal through its string form.

    Floats go through ``str`` so 3.85 becomes Decimal("3.85"), not the
    binary expansion.

    Raises:
        ValueError: if the value has no decimal representation.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid {field}: {value!r}")
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid {field}: {value!r}") from e


def as_optional_decimal(value: Any, field: str = "value") -> Decimal | None:
    if value is None:
        return None
    return as_decimal(value, field)


def round_money(amount: Decimal, exponent: Decimal = CENTS) -> Decimal:
    """Round half away from zero on the given boundary (cents by default)."""
    return amount.quantize(exponent, rounding=ROUND_HALF_UP)
