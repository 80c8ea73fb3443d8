"""
Development settings for the Coupon API project.

These settings override the base settings for local development environments.
"""

import os

from .base import *

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = env("SECRET_KEY", "django-insecure-development-key-not-for-production")

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = env("DEBUG", "True") == "True"

# Allow all hosts in development (for convenience)
ALLOWED_HOSTS = ["*"]

# Local PostgreSQL unless USE_SQLITE is set
if os.environ.get("USE_SQLITE", "False").lower() != "true":
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.environ.get("POSTGRES_DB", "coupons"),
            "USER": os.environ.get("POSTGRES_USER", "coupons"),
            "PASSWORD": os.environ.get("POSTGRES_PASSWORD", "coupons"),
            "HOST": os.environ.get("POSTGRES_HOST", "localhost"),
            "PORT": os.environ.get("POSTGRES_PORT", "5432"),
            "CONN_MAX_AGE": 300,
            "OPTIONS": {
                "connect_timeout": 5,
                "sslmode": os.environ.get("POSTGRES_SSL_MODE", "disable"),
            },
            "ATOMIC_REQUESTS": True,
        }
    }

# Plain HTTP locally
SECURE_SSL_REDIRECT = False
SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False
SECURE_HSTS_SECONDS = 0

# Browsable API is handy while developing
REST_FRAMEWORK["DEFAULT_RENDERER_CLASSES"] = (
    "rest_framework.renderers.JSONRenderer",
    "rest_framework.renderers.BrowsableAPIRenderer",
)

CORS_ALLOW_ALL_ORIGINS = True

LOGGING["loggers"]["apps"]["level"] = "DEBUG"
