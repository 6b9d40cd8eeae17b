# orderdesk/utils/money.py
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value) -> Decimal:
    """Floats go through str() so 199.99 stays 199.99 and not its binary neighbour."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValueError(f"Not a decimal value: {value!r}") from e


def round_cents(value: Decimal) -> Decimal:
    # presentation only, never inside a running sum
    return value.quantize(CENT, rounding=ROUND_HALF_UP)
