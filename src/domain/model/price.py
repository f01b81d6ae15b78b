"""Currency amount helpers shared by the catalog and the price ciphers."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from domain.model.errors import ValidationError

CURRENCY_QUANTUM = Decimal('0.01')


def to_amount(value) -> Decimal:
    """Coerce a user-supplied price into a non-negative amount in cents precision.

    Accepts Decimal, int, float or numeric strings. Floats go through str()
    so that 199.99 stays 199.99 rather than its binary expansion.

    Raises:
        ValidationError: value is not a finite, non-negative number
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError("Price must be a number")
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value) if not isinstance(value, Decimal) else value
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError("Price must be a number")

    if not amount.is_finite():
        raise ValidationError("Price must be a finite number")
    if amount < 0:
        raise ValidationError("Price cannot be negative")
    try:
        return amount.quantize(CURRENCY_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationError("Price is out of range")


def format_amount(amount: Decimal) -> str:
    """Plaintext form of an amount as it is fed to a cipher, e.g. '199.99'."""
    return format(to_amount(amount), 'f')
