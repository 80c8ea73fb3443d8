"""
Coupon app services.

Field normalization, code uniqueness, persistence and the resource service
that orchestrates them.
"""

from .coupon_repository import CouponRepository
from .coupon_service import CouponResourceService
from .field_normalizer import CouponFieldNormalizer
from .uniqueness_guard import CouponCodeGuard

__all__ = [
    "CouponFieldNormalizer",
    "CouponCodeGuard",
    "CouponRepository",
    "CouponResourceService",
]
