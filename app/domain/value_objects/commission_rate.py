"""
Commission calculation on integer minor units.

Rule: ``commission = total_cents * rate / 100`` rounded half-up to the
nearest cent. Rates are percentages (``Decimal("10.00")`` means 10 %).
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

MAX_COMMISSION_RATE = Decimal("100")
RATE_PRECISION = Decimal("0.01")


def to_commission_rate(value: Decimal | int | str) -> Decimal:
    """
    Normalize a commission rate to a Decimal percentage.

    Floats are rejected so binary rounding never reaches the ledger. Rates
    are rounded half-up to two decimal places, the precision the ledger stores.

    Raises:
        TypeError: If the rate is a float or an unsupported type
        ValueError: If the rate is not a number in ``[0, 100]``
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(f"Commission rate must be Decimal, int or str, got {type(value).__name__}")
    if not isinstance(value, (Decimal, int, str)):
        raise TypeError(f"Unsupported commission rate type: {type(value).__name__}")

    try:
        rate = Decimal(value) if not isinstance(value, str) else Decimal(value.strip())
    except InvalidOperation as e:
        raise ValueError(f"Invalid commission rate: {value!r}") from e

    if not rate.is_finite() or rate < 0 or rate > MAX_COMMISSION_RATE:
        raise ValueError(f"Commission rate must be between 0 and 100: {value}")

    return rate.quantize(RATE_PRECISION, rounding=ROUND_HALF_UP)


def calculate_commission(total_cents: int, commission_rate: Decimal | int | str) -> int:
    """
    Compute the marketplace commission for a line total.

    Args:
        total_cents: Line total in minor currency units
        commission_rate: Seller commission percentage

    Returns:
        int: Commission in minor currency units, rounded half-up

    Example:
        >>> calculate_commission(2000, Decimal("10"))
        200
        >>> calculate_commission(333, Decimal("12.5"))
        42
    """
    if isinstance(total_cents, bool) or not isinstance(total_cents, int):
        raise TypeError(f"Total must be an integer number of cents, got {type(total_cents).__name__}")
    if total_cents < 0:
        raise ValueError(f"Total cannot be negative: {total_cents}")

    rate = to_commission_rate(commission_rate)
    amount = (Decimal(total_cents) * rate / Decimal(100)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(amount)
