# apps/couponapp/hooks.py
"""
Pre-write transforms applied to a submitted coupon code.

``settings.COUPONS["CODE_HOOKS"]`` lists dotted paths to callables taking and
returning a code; they run in order before format validation and the
uniqueness check.
"""

from django.utils.module_loading import import_string

from apps.couponapp.conf import get_setting


def strip_code(code):
    return code.strip()


def lowercase_code(code):
    return code.lower()


def get_code_hooks():
    return [
        import_string(hook) if isinstance(hook, str) else hook
        for hook in get_setting("CODE_HOOKS") or []
    ]


def apply_code_hooks(code):
    code = str(code)
    for hook in get_code_hooks():
        code = hook(code)
    return code
