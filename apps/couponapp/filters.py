# apps/couponapp/filters.py
import django_filters
from django.db.models import Exists, OuterRef

from apps.couponapp.constants import (
    DEFAULT_ORDER,
    DEFAULT_ORDERBY,
    ORDERBY_FIELDS,
    STATUS_PUBLISH,
)
from apps.couponapp.models import Coupon, CouponMeta


class CouponFilter(django_filters.FilterSet):
    """Caller filters shared by the list and count operations."""

    status = django_filters.CharFilter(method="filter_status")
    code = django_filters.CharFilter(field_name="code", lookup_expr="iexact")
    type = django_filters.CharFilter(method="filter_type")
    q = django_filters.CharFilter(field_name="code", lookup_expr="icontains")
    created_at_min = django_filters.IsoDateTimeFilter(field_name="created_at", lookup_expr="gte")
    created_at_max = django_filters.IsoDateTimeFilter(field_name="created_at", lookup_expr="lte")
    updated_at_min = django_filters.IsoDateTimeFilter(field_name="updated_at", lookup_expr="gte")
    updated_at_max = django_filters.IsoDateTimeFilter(field_name="updated_at", lookup_expr="lte")
    order = django_filters.ChoiceFilter(
        choices=(("asc", "asc"), ("desc", "desc")), method="filter_noop"
    )
    orderby = django_filters.ChoiceFilter(
        choices=[(field, field) for field in ORDERBY_FIELDS], method="filter_noop"
    )

    class Meta:
        model = Coupon
        fields = [
            "status",
            "code",
            "type",
            "q",
            "created_at_min",
            "created_at_max",
            "updated_at_min",
            "updated_at_max",
            "order",
            "orderby",
        ]

    def filter_status(self, queryset, name, value):
        """Only published coupons are ever listed"""
        if value.strip().lower() != STATUS_PUBLISH:
            return queryset.none()
        return queryset.filter(status=STATUS_PUBLISH)

    def filter_type(self, queryset, name, value):
        matching_meta = CouponMeta.objects.filter(
            coupon=OuterRef("pk"), meta_key="discount_type", meta_value=value.strip()
        )
        return queryset.filter(Exists(matching_meta))

    def filter_noop(self, queryset, name, value):
        return queryset

    def filter_queryset(self, queryset):
        queryset = super().filter_queryset(queryset)
        orderby = self.form.cleaned_data.get("orderby") or DEFAULT_ORDERBY
        order = self.form.cleaned_data.get("order") or DEFAULT_ORDER
        prefix = "-" if order == "desc" else ""
        return queryset.order_by(f"{prefix}{orderby}", f"{prefix}id")

    def first_error_field(self):
        """Name of the first filter that failed validation, if any."""
        for name in self.form.errors:
            return name
        return None
