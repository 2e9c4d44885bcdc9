from decimal import Decimal, ROUND_HALF_UP

CENT = Decimal("0.01")


def to_cents(value) -> Decimal:
    """Round a money amount half-up to paise, the precision the money columns store."""
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(quantity: int, price) -> Decimal:
    """quantity * unit price, rounded to paise."""
    return to_cents(Decimal(quantity) * Decimal(str(price)))
