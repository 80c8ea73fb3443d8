# apps/couponapp/permissions.py
"""
Capability checks for coupon operations.

The resource service asks an ``Authorizer`` whether a user may perform an
action, optionally on a specific coupon. The default implementation maps
actions onto Django model permissions.
"""

import logging

from django.utils.module_loading import import_string

from apps.couponapp.conf import get_setting
from apps.couponapp.constants import (
    ACTION_DELETE,
    ACTION_EDIT,
    ACTION_PUBLISH,
    ACTION_READ,
    ACTION_READ_PRIVATE,
)

logger = logging.getLogger(__name__)


class Authorizer:
    """Interface: ``can(user, action, coupon=None) -> bool``."""

    def can(self, user, action, coupon=None):
        raise NotImplementedError


class DjangoPermissionAuthorizer(Authorizer):
    """Authorize coupon actions with ``user.has_perm``."""

    PERMISSION_MAP = {
        ACTION_READ: "couponapp.view_coupon",
        ACTION_READ_PRIVATE: "couponapp.read_private_coupons",
        ACTION_PUBLISH: "couponapp.publish_coupons",
        ACTION_EDIT: "couponapp.change_coupon",
        ACTION_DELETE: "couponapp.delete_coupon",
    }

    def can(self, user, action, coupon=None):
        if user is None or not user.is_authenticated or not user.is_active:
            return False

        permission = self.PERMISSION_MAP.get(action)
        if permission is None:
            logger.warning("Unknown coupon action requested: %s", action)
            return False

        # Model-level permission; ModelBackend denies every object-level check
        return user.has_perm(permission)


def get_authorizer():
    """Instantiate the authorizer configured in ``COUPONS["AUTHORIZER"]``."""
    authorizer = get_setting("AUTHORIZER")
    if isinstance(authorizer, str):
        authorizer = import_string(authorizer)
    return authorizer() if isinstance(authorizer, type) else authorizer
