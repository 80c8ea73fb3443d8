from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import Coupon, CouponMeta


class CouponMetaInline(admin.TabularInline):
    """
    Inline admin for stored coupon properties
    """

    model = CouponMeta
    fields = ("meta_key", "meta_value")
    extra = 0
    verbose_name = _("Property")
    verbose_name_plural = _("Properties")


@admin.register(Coupon)
class CouponAdmin(admin.ModelAdmin):
    """
    Admin configuration for the Coupon model
    """

    list_display = ("code", "status", "author", "created_at", "updated_at")
    list_filter = ("status", "created_at")
    search_fields = ("code",)
    readonly_fields = ("created_at", "updated_at")
    raw_id_fields = ("author",)
    inlines = [CouponMetaInline]
