# apps/couponapp/services/uniqueness_guard.py
import logging

logger = logging.getLogger(__name__)


class CouponCodeGuard:
    """
    Fast-fail check for coupon code collisions.

    Only published coupons hold a code: trashed coupons free theirs and drafts
    are outside the uniqueness scope. The partial unique index on the coupon
    table remains the authoritative guard under concurrent writers.
    """

    def __init__(self, repository):
        self.repository = repository

    def check(self, code, exclude_id=None):
        """Return True when another published coupon already uses ``code``."""
        collision = self.repository.code_exists(code, exclude_id=exclude_id)
        if collision:
            logger.info("Coupon code collision for %r (excluding %s)", code, exclude_id)
        return collision
