# apps/couponapp/services/field_normalizer.py
"""
Reconciles a sparse external coupon payload into a complete canonical map.

The canonical map uses real Python types: ``Decimal`` amounts, ``bool`` flags,
``list[int]`` id lists, ``int | None`` limits, ``date | None`` expiry and a
``list[str]`` of customer emails.
"""

import datetime
import decimal

from django.utils.dateparse import parse_date, parse_datetime

from apps.couponapp.constants import (
    BOOLEAN_FIELDS,
    DECIMAL_FIELDS,
    FIELD_ALIASES,
    ID_LIST_FIELDS,
    LIMIT_FIELDS,
)
from apps.couponapp.exceptions import InvalidFieldFormat
from apps.couponapp.validators import is_valid_email
from core.utils.formatters import to_decimal

TRUTHY_STRINGS = ("1", "true", "yes", "on")

EMPTY_VALUES = (None, "")


def to_bool(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_STRINGS
    return False


def to_id_list(values):
    """Positive integer ids from ``values``, de-duplicated in first-seen order."""
    ids = []
    seen = set()
    for value in values:
        if isinstance(value, bool):
            continue
        try:
            number = int(str(value).strip())
        except (TypeError, ValueError):
            continue
        if number > 0 and number not in seen:
            seen.add(number)
            ids.append(number)
    return ids


def to_email_list(values):
    emails = []
    seen = set()
    for value in values:
        if not isinstance(value, str):
            continue
        email = value.strip()
        if email and email not in seen and is_valid_email(email):
            seen.add(email)
            emails.append(email)
    return emails


class CouponFieldNormalizer:
    """Pure transformation from a partial payload to a canonical field map."""

    def resolve_aliases(self, data):
        resolved = {}
        for key, value in (data or {}).items():
            resolved[FIELD_ALIASES.get(key, key)] = value
        # The canonical name wins when both spellings are sent
        for canonical in FIELD_ALIASES.values():
            if canonical in (data or {}):
                resolved[canonical] = data[canonical]
        return resolved

    def normalize(self, data, existing=None):
        data = self.resolve_aliases(data)
        existing = existing or {}

        fields = {
            "discount_type": self._discount_type(data, existing),
            "usage_count": existing.get("usage_count", 0),
            "expiry_date": self._expiry_date(data, existing),
            "customer_emails": self._emails(data, existing),
        }

        for field in DECIMAL_FIELDS:
            fields[field] = self._decimal(field, data, existing)
        for field in BOOLEAN_FIELDS:
            if field in data and data[field] not in EMPTY_VALUES:
                fields[field] = to_bool(data[field])
            else:
                fields[field] = bool(existing.get(field, False))
        for field in ID_LIST_FIELDS:
            if isinstance(data.get(field), (list, tuple)):
                fields[field] = to_id_list(data[field])
            else:
                fields[field] = list(existing.get(field) or [])
        for field in LIMIT_FIELDS:
            fields[field] = self._limit(field, data, existing)

        return fields

    def _discount_type(self, data, existing):
        value = data.get("discount_type")
        if isinstance(value, str) and value.strip():
            return value.strip()
        return existing.get("discount_type")

    def _decimal(self, field, data, existing):
        value = data.get(field)
        if value in EMPTY_VALUES:
            previous = existing.get(field)
            return previous if previous is not None else decimal.Decimal("0.00")

        try:
            amount = to_decimal(value)
        except (decimal.InvalidOperation, TypeError, ValueError):
            raise InvalidFieldFormat(field)

        if amount < 0:
            raise InvalidFieldFormat(field)
        return amount

    def _limit(self, field, data, existing):
        value = data.get(field)
        if value in EMPTY_VALUES or value == 0 or value == "0":
            return existing.get(field)

        if isinstance(value, bool):
            raise InvalidFieldFormat(field)
        if isinstance(value, float):
            if not value.is_integer():
                raise InvalidFieldFormat(field)
            value = int(value)

        try:
            limit = int(str(value).strip())
        except (TypeError, ValueError):
            raise InvalidFieldFormat(field)

        if limit < 0:
            raise InvalidFieldFormat(field)
        return limit or existing.get(field)

    def _expiry_date(self, data, existing):
        if "expiry_date" not in data:
            return existing.get("expiry_date")

        value = data["expiry_date"]
        if value in EMPTY_VALUES:
            return None
        if isinstance(value, datetime.datetime):
            return self._utc_date(value)
        if isinstance(value, datetime.date):
            return value
        if not isinstance(value, str):
            raise InvalidFieldFormat("expiry_date")

        value = value.strip()
        try:
            parsed = parse_date(value)
            if parsed is not None:
                return parsed
            parsed = parse_datetime(value)
        except ValueError:
            raise InvalidFieldFormat("expiry_date")

        if parsed is None:
            raise InvalidFieldFormat("expiry_date")
        return self._utc_date(parsed)

    def _utc_date(self, value):
        if value.tzinfo is None:
            return value.date()
        return value.astimezone(datetime.timezone.utc).date()

    def _emails(self, data, existing):
        value = data.get("customer_emails")
        if isinstance(value, (list, tuple)):
            return to_email_list(value)
        return list(existing.get("customer_emails") or [])
