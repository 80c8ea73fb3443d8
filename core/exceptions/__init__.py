"""
Coupon API – centralised exception handling.

Domain errors are DRF ``APIException`` subclasses living next to the app that
raises them (see ``apps.couponapp.exceptions``). This package only holds the
project-wide DRF exception handler that renders them.
"""

from __future__ import annotations

from .exception_handler import exception_handler

__all__ = [
    "exception_handler",
]
