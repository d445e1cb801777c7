from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django import template

from catalog.pricing import format_amount

register = template.Library()


@register.filter
def tenge(value):
    try:
        return f"{format_amount(value)} ₸"
    except (InvalidOperation, TypeError, ValueError):
        return value


@register.filter
def tons(value):
    """Up to two decimals, trailing zeros dropped: 1 -> '1', 1.10 -> '1.1', 0.15 -> '0.15'."""
    try:
        d = Decimal(str(value)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError, ValueError):
        return value
    return f"{d.normalize():f}"
