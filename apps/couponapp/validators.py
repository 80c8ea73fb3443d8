# apps/couponapp/validators.py
import re

from django.core.exceptions import ValidationError
from django.core.validators import validate_email

from apps.couponapp.constants import COUPON_CODE_PATTERN, MAX_COUPON_CODE_LENGTH
from apps.couponapp.exceptions import InvalidFieldFormat

COUPON_CODE_RE = re.compile(rf"^{COUPON_CODE_PATTERN}$")


def validate_coupon_code(code):
    """
    Validate a (hook-transformed) coupon code.

    Raises InvalidFieldFormat("code") for blank codes, codes longer than the
    column allows, or codes with characters outside word/space/hyphen.
    """
    if not isinstance(code, str) or not code:
        raise InvalidFieldFormat("code")
    if len(code) > MAX_COUPON_CODE_LENGTH or not COUPON_CODE_RE.match(code):
        raise InvalidFieldFormat("code")
    return code


def is_valid_email(value):
    try:
        validate_email(value)
    except ValidationError:
        return False
    return True
