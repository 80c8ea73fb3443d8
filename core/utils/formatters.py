"""
Data formatting utilities for the Coupon API.

This module provides the canonical wire formats for decimals and dates.
"""

import datetime
import decimal

from django.utils import timezone

API_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

TWO_PLACES = decimal.Decimal("0.01")


def to_decimal(value, places=TWO_PLACES):
    """
    Convert a value to a Decimal quantized to ``places``.

    Args:
        value: int, float, str or Decimal
        places (Decimal): Quantization exponent (default: 0.01)

    Returns:
        Decimal: Quantized value

    Raises:
        decimal.InvalidOperation: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise decimal.InvalidOperation(value)

    if not isinstance(value, decimal.Decimal):
        value = decimal.Decimal(str(value).strip())

    if not value.is_finite():
        raise decimal.InvalidOperation(value)

    return value.quantize(places, rounding=decimal.ROUND_HALF_UP)


def format_decimal(value, decimal_places=2):
    """
    Format a number with a fixed number of decimal places.

    ``format_decimal("10")`` -> ``"10.00"``; ``None`` and ``""`` count as zero.
    """
    places = decimal.Decimal(1).scaleb(-decimal_places)
    return str(to_decimal(value or 0, places))


def format_datetime(value):
    """
    Format a date or datetime in the API's UTC format (``2024-01-31T00:00:00Z``).

    Naive datetimes are taken to be in the default timezone; plain dates are
    midnight UTC.
    """
    if value is None:
        return None

    if not isinstance(value, datetime.datetime):
        value = datetime.datetime.combine(value, datetime.time.min, tzinfo=datetime.timezone.utc)
    elif timezone.is_naive(value):
        value = timezone.make_aware(value)

    return value.astimezone(datetime.timezone.utc).strftime(API_DATETIME_FORMAT)
