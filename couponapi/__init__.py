"""
Coupon API Django project.

Settings live in ``couponapi.settings``; pick one with DJANGO_SETTINGS_MODULE.
"""

__version__ = "1.0.0"
