# apps/couponapp/exceptions.py
"""
Coupon API error taxonomy.

Every error is a DRF ``APIException`` so views can let it propagate; the
project exception handler renders it as ``{"error", "message", "status",
"details"}``.
"""

from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.exceptions import APIException

from apps.couponapp.constants import (
    ERROR_DUPLICATE_CODE,
    ERROR_FORBIDDEN,
    ERROR_INVALID_FIELD,
    ERROR_INVALID_TYPE,
    ERROR_MISSING_PARAMETER,
    ERROR_STORAGE,
)


class CouponAPIException(APIException):
    """Base class for coupon errors carrying structured ``details``."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _("Invalid coupon request.")
    default_code = "coupon_error"

    def __init__(self, detail=None, details=None):
        super().__init__(detail=detail, code=self.default_code)
        self.details = details


class MissingParameter(CouponAPIException):
    default_code = "missing_parameter"

    def __init__(self, field):
        self.field = field
        super().__init__(
            detail=ERROR_MISSING_PARAMETER % {"field": field},
            details={"field": field},
        )


class InvalidCouponType(CouponAPIException):
    default_code = "invalid_coupon_type"

    def __init__(self, allowed):
        self.allowed = list(allowed)
        super().__init__(
            detail=ERROR_INVALID_TYPE % {"types": ", ".join(self.allowed)},
            details={"allowed": self.allowed},
        )


class InvalidFieldFormat(CouponAPIException):
    default_code = "invalid_field_format"

    def __init__(self, field):
        self.field = field
        super().__init__(
            detail=ERROR_INVALID_FIELD % {"field": field},
            details={"field": field},
        )


class DuplicateCouponCode(CouponAPIException):
    default_code = "duplicate_coupon_code"

    def __init__(self, code):
        self.code = code
        super().__init__(detail=ERROR_DUPLICATE_CODE, details={"code": code})


class CouponNotFound(CouponAPIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = _("Coupon not found.")
    default_code = "not_found"

    def __init__(self, detail=None, lookup=None):
        super().__init__(
            detail=detail or self.default_detail,
            details={"lookup": lookup} if lookup is not None else None,
        )


class CouponForbidden(CouponAPIException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_code = "forbidden"

    def __init__(self, operation):
        self.operation = operation
        super().__init__(
            detail=ERROR_FORBIDDEN % {"operation": operation},
            details={"operation": operation},
        )


class StorageError(CouponAPIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code = "storage_error"

    def __init__(self, cause=None):
        self.cause = cause
        super().__init__(
            detail=ERROR_STORAGE,
            details={"cause": str(cause)} if cause is not None else None,
        )
