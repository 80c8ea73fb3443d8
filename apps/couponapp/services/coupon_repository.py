# apps/couponapp/services/coupon_repository.py
"""
Read/write access to coupons and their meta rows.

The repository is the only place that knows how canonical coupon fields are
encoded in ``CouponMeta``: ``yes``/``no`` flags, comma-delimited product ids,
JSON category and email lists, and ``YYYY-MM-DD`` expiry dates.
"""

import datetime
import decimal
import json
import logging

from django.core.paginator import Paginator
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from apps.couponapp.constants import (
    BOOLEAN_FIELDS,
    CATEGORY_ID_FIELDS,
    LIMIT_FIELDS,
    NO,
    PRODUCT_ID_FIELDS,
    STATUS_PUBLISH,
    STATUS_TRASH,
    YES,
)
from apps.couponapp.exceptions import (
    CouponNotFound,
    DuplicateCouponCode,
    InvalidFieldFormat,
    StorageError,
)
from apps.couponapp.filters import CouponFilter
from apps.couponapp.models import Coupon, CouponMeta
from core.utils.formatters import format_decimal, to_decimal

logger = logging.getLogger(__name__)

UNIQUE_CODE_CONSTRAINT = "unique_published_coupon_code"

# Canonical field -> meta_key
META_KEYS = {
    "discount_type": "discount_type",
    "amount": "coupon_amount",
    "individual_use": "individual_use",
    "product_ids": "product_ids",
    "exclude_product_ids": "exclude_product_ids",
    "usage_limit": "usage_limit",
    "usage_limit_per_user": "usage_limit_per_user",
    "limit_usage_to_x_items": "limit_usage_to_x_items",
    "usage_count": "usage_count",
    "expiry_date": "expiry_date",
    "apply_before_tax": "apply_before_tax",
    "free_shipping": "free_shipping",
    "exclude_sale_items": "exclude_sale_items",
    "product_category_ids": "product_categories",
    "exclude_product_category_ids": "exclude_product_categories",
    "minimum_amount": "minimum_amount",
    "customer_emails": "customer_email",
}

# Maintained by order processing, never written through this repository
READ_ONLY_FIELDS = ("usage_count",)


def _parse_int(value):
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def _parse_json_list(value):
    try:
        decoded = json.loads(value) if value else []
    except ValueError:
        return []
    return decoded if isinstance(decoded, list) else []


def encode_value(field, value):
    """Encode one canonical field value as a meta string."""
    if field in BOOLEAN_FIELDS:
        return YES if value else NO
    if field in PRODUCT_ID_FIELDS:
        return ",".join(str(item) for item in value or [])
    if field in CATEGORY_ID_FIELDS or field == "customer_emails":
        return json.dumps(list(value or []))
    if field in LIMIT_FIELDS:
        return str(value) if value else ""
    if field in ("amount", "minimum_amount"):
        return format_decimal(value)
    if field == "expiry_date":
        return value.isoformat() if value else ""
    if value is None:
        return ""
    return str(value)


def decode_value(field, raw):
    """Decode one meta string into its canonical value."""
    if field in BOOLEAN_FIELDS:
        return raw == YES
    if field in PRODUCT_ID_FIELDS:
        ids = (_parse_int(item) for item in (raw or "").split(","))
        return [item for item in ids if item and item > 0]
    if field in CATEGORY_ID_FIELDS:
        ids = (_parse_int(item) for item in _parse_json_list(raw))
        return [item for item in ids if item and item > 0]
    if field == "customer_emails":
        return [item for item in _parse_json_list(raw) if isinstance(item, str)]
    if field in LIMIT_FIELDS:
        limit = _parse_int(raw)
        return limit if limit and limit > 0 else None
    if field == "usage_count":
        return max(_parse_int(raw) or 0, 0)
    if field in ("amount", "minimum_amount"):
        try:
            return to_decimal(raw or 0)
        except decimal.InvalidOperation:
            return decimal.Decimal("0.00")
    if field == "expiry_date":
        try:
            return datetime.date.fromisoformat(raw) if raw else None
        except ValueError:
            return None
    return raw or None


class CouponRepository:
    """Coupon persistence on top of the Django ORM."""

    def _published(self):
        return Coupon.objects.filter(status=STATUS_PUBLISH)

    def _attach(self, coupon):
        coupon.properties = self.get_fields(coupon)
        return coupon

    def find_by_id(self, coupon_id):
        """Return the coupon with ``coupon_id`` in any status, or None."""
        try:
            coupon = Coupon.objects.prefetch_related("meta").filter(pk=coupon_id).first()
        except DatabaseError as e:
            raise StorageError(e) from e
        return self._attach(coupon) if coupon is not None else None

    def find_by_code(self, code):
        """Return the published coupon using ``code`` (case-insensitive), or None."""
        try:
            coupon = (
                self._published()
                .prefetch_related("meta")
                .filter(code__iexact=code)
                .order_by("-created_at", "-id")
                .first()
            )
        except DatabaseError as e:
            raise StorageError(e) from e
        return self._attach(coupon) if coupon is not None else None

    def code_exists(self, code, exclude_id=None):
        queryset = self._published().filter(code__iexact=code)
        if exclude_id is not None:
            queryset = queryset.exclude(pk=exclude_id)
        try:
            return queryset.exists()
        except DatabaseError as e:
            raise StorageError(e) from e

    def filter_queryset(self, filters=None):
        """Published coupons narrowed by caller filters, ordered for listing."""
        filterset = CouponFilter(data=filters or {}, queryset=self._published())
        if not filterset.is_valid():
            raise InvalidFieldFormat(filterset.first_error_field())
        return filterset.qs

    def list(self, filters=None, page=1, per_page=10):
        """
        Return ``(coupons, total_count)`` for a 1-indexed page.

        A page past the end yields no coupons but still reports the real total.
        """
        queryset = self.filter_queryset(filters).prefetch_related("meta")
        paginator = Paginator(queryset, per_page)
        try:
            total = paginator.count
            if total == 0 or page > paginator.num_pages:
                return [], total
            coupons = list(paginator.page(page).object_list)
        except DatabaseError as e:
            raise StorageError(e) from e
        return [self._attach(coupon) for coupon in coupons], total

    def count(self, filters=None):
        queryset = self.filter_queryset(filters)
        try:
            return queryset.count()
        except DatabaseError as e:
            raise StorageError(e) from e

    def create(self, code, fields, author=None):
        """Insert a published coupon with its meta rows and return its id."""
        meta = self.encode_fields(fields)
        meta[META_KEYS["usage_count"]] = "0"

        try:
            with transaction.atomic():
                coupon = Coupon.objects.create(code=code, status=STATUS_PUBLISH, author=author)
                CouponMeta.objects.bulk_create(
                    [
                        CouponMeta(coupon=coupon, meta_key=key, meta_value=value)
                        for key, value in meta.items()
                    ]
                )
        except IntegrityError as e:
            raise self._integrity_error(e, code) from e
        except DatabaseError as e:
            raise StorageError(e) from e

        logger.info("Created coupon %s (%s)", coupon.pk, code)
        return coupon.pk

    def update_fields(self, coupon_id, fields, code=None):
        """Write ``fields`` (and optionally a new code) in one transaction."""
        meta = self.encode_fields(fields)

        try:
            with transaction.atomic():
                coupon = Coupon.objects.select_for_update().filter(pk=coupon_id).first()
                if coupon is None:
                    raise CouponNotFound(lookup=coupon_id)

                if code is not None:
                    coupon.code = code
                coupon.save(update_fields=["code", "updated_at"])

                for key, value in meta.items():
                    CouponMeta.objects.update_or_create(
                        coupon=coupon, meta_key=key, defaults={"meta_value": value}
                    )
        except IntegrityError as e:
            raise self._integrity_error(e, code) from e
        except DatabaseError as e:
            raise StorageError(e) from e

        logger.info("Updated coupon %s", coupon_id)

    def soft_delete(self, coupon_id):
        try:
            updated = Coupon.objects.filter(pk=coupon_id).update(
                status=STATUS_TRASH, updated_at=timezone.now()
            )
        except DatabaseError as e:
            raise StorageError(e) from e

        logger.info("Trashed coupon %s", coupon_id)
        return bool(updated)

    def hard_delete(self, coupon_id):
        try:
            with transaction.atomic():
                deleted, _ = Coupon.objects.filter(pk=coupon_id).delete()
        except DatabaseError as e:
            raise StorageError(e) from e

        logger.info("Permanently deleted coupon %s", coupon_id)
        return bool(deleted)

    def get_fields(self, coupon):
        """Decode a coupon's meta rows into the canonical field map."""
        raw = {item.meta_key: item.meta_value for item in coupon.meta.all()}
        return {
            field: decode_value(field, raw.get(meta_key, ""))
            for field, meta_key in META_KEYS.items()
        }

    def encode_fields(self, fields):
        return {
            META_KEYS[field]: encode_value(field, value)
            for field, value in fields.items()
            if field in META_KEYS and field not in READ_ONLY_FIELDS
        }

    def _integrity_error(self, error, code):
        if UNIQUE_CODE_CONSTRAINT in str(error):
            logger.warning("Unique code constraint rejected coupon code %r", code)
            return DuplicateCouponCode(code)
        return StorageError(error)
