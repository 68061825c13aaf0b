"""
Currency helpers.

Amounts are stored as integer minor units (cents). They are converted to
major units for edit forms and to a locale-formatted string for display.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from babel.numbers import format_currency as babel_format_currency

from invoicedash.config import config

LOCALE = config.locale
CURRENCY = config.currency

MINOR_UNITS_PER_MAJOR = 100


def _to_decimal(amount: Any) -> Decimal:
    """Coerce a stored amount to Decimal; anything unusable becomes zero."""
    if amount is None or isinstance(amount, bool):
        return Decimal(0)
    if isinstance(amount, Decimal):
        value = amount
    else:
        try:
            value = Decimal(str(amount).strip())
        except (InvalidOperation, ValueError):
            return Decimal(0)
    if not value.is_finite():
        return Decimal(0)
    return value


def format_currency(amount: Any) -> str:
    """
    Format an amount of minor units for display, e.g. 123456 -> "$1,234.56".

    None and non-numeric input format as zero.
    """
    major = _to_decimal(amount) / MINOR_UNITS_PER_MAJOR
    return babel_format_currency(major, CURRENCY, locale=LOCALE)


def to_major_units(amount: Any) -> float:
    """Convert minor units to major units, e.g. 15795 -> 157.95."""
    return float(_to_decimal(amount) / MINOR_UNITS_PER_MAJOR)
