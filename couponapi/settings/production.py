"""
Production settings for the Coupon API project.

These settings override the base settings for production environments.
"""

import os

from .base import *
from .base import env

STATIC_ROOT = os.environ.get("STATIC_ROOT", "/opt/couponapi/static")

DEBUG = os.environ.get("DEBUG", "False").lower() == "true"

SECRET_KEY = env("SECRET_KEY", required=True)
SIMPLE_JWT["SIGNING_KEY"] = SECRET_KEY

ALLOWED_HOSTS = env("ALLOWED_HOSTS", required=True).split(",")

DATABASES["default"]["CONN_MAX_AGE"] = int(os.environ.get("DB_MAX_LIFETIME", 1800))
DATABASES["default"]["OPTIONS"]["sslmode"] = os.environ.get("POSTGRES_SSL_MODE", "require")

SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
SECURE_HSTS_PRELOAD = True

LOGGING["handlers"]["console"]["level"] = "WARNING"
