"""
Core utilities and shared components for the Coupon API.

This package provides the pieces used across the project: the DRF exception
handler, response formatters and pagination header helpers.
"""

__version__ = "1.0.0"
