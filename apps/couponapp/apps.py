from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class CouponAppConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.couponapp"
    label = "couponapp"
    verbose_name = _("Coupons")

    def ready(self):
        # Import signals to ensure they are registered
        from apps.couponapp import signals  # noqa: F401
