# apps/couponapp/conf.py
"""Access to the ``COUPONS`` settings dict with defaults filled in."""

from django.conf import settings

DEFAULTS = {
    "PAGE_SIZE": 10,
    "MAX_PAGE_SIZE": 100,
    "TYPES": None,
    "CODE_HOOKS": ["apps.couponapp.hooks.strip_code"],
    "AUTHORIZER": "apps.couponapp.permissions.DjangoPermissionAuthorizer",
}


def get_setting(name):
    """Return ``settings.COUPONS[name]``, falling back to the app default."""
    user_settings = getattr(settings, "COUPONS", None) or {}
    if name in user_settings:
        return user_settings[name]
    return DEFAULTS[name]
