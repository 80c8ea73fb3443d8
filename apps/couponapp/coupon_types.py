# apps/couponapp/coupon_types.py
"""
Registry of coupon types a coupon's ``type`` may take.

The base set is ``settings.COUPONS["TYPES"]`` when configured, otherwise the
built-in types. Plugins can extend or shrink it at runtime.
"""

import logging

from apps.couponapp.conf import get_setting
from apps.couponapp.constants import DEFAULT_COUPON_TYPES

logger = logging.getLogger(__name__)

_registered = {}
_unregistered = set()


def get_coupon_types():
    """Return the current ``{key: label}`` mapping of coupon types."""
    configured = get_setting("TYPES")
    types = dict(configured) if configured is not None else dict(DEFAULT_COUPON_TYPES)
    types.update(_registered)
    for key in _unregistered:
        types.pop(key, None)
    return types


def is_valid_coupon_type(key):
    return isinstance(key, str) and key in get_coupon_types()


def register_coupon_type(key, label=None):
    _unregistered.discard(key)
    _registered[key] = label or key
    logger.info("Registered coupon type %s", key)


def unregister_coupon_type(key):
    _registered.pop(key, None)
    _unregistered.add(key)
    logger.info("Unregistered coupon type %s", key)


def reset_coupon_types():
    """Drop every runtime registration."""
    _registered.clear()
    _unregistered.clear()
