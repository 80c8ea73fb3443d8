# apps/couponapp/serializers.py
from rest_framework import serializers

from core.utils.formatters import format_datetime, format_decimal


class CouponSerializer(serializers.Serializer):
    """
    Shapes a coupon (with decoded ``properties``) into its external record.

    Pass ``fields=[...]`` to keep only the named top-level keys.
    """

    id = serializers.IntegerField(source="pk", read_only=True)
    code = serializers.CharField(read_only=True)
    type = serializers.CharField(source="properties.discount_type", read_only=True)
    created_at = serializers.SerializerMethodField()
    updated_at = serializers.SerializerMethodField()
    amount = serializers.SerializerMethodField()
    individual_use = serializers.BooleanField(source="properties.individual_use", read_only=True)
    product_ids = serializers.ListField(
        child=serializers.IntegerField(), source="properties.product_ids", read_only=True
    )
    exclude_product_ids = serializers.ListField(
        child=serializers.IntegerField(), source="properties.exclude_product_ids", read_only=True
    )
    usage_limit = serializers.IntegerField(source="properties.usage_limit", read_only=True)
    usage_limit_per_user = serializers.IntegerField(
        source="properties.usage_limit_per_user", read_only=True
    )
    limit_usage_to_x_items = serializers.IntegerField(
        source="properties.limit_usage_to_x_items", read_only=True
    )
    usage_count = serializers.IntegerField(source="properties.usage_count", read_only=True)
    expiry_date = serializers.SerializerMethodField()
    apply_before_tax = serializers.BooleanField(
        source="properties.apply_before_tax", read_only=True
    )
    free_shipping = serializers.BooleanField(source="properties.free_shipping", read_only=True)
    product_category_ids = serializers.ListField(
        child=serializers.IntegerField(), source="properties.product_category_ids", read_only=True
    )
    exclude_product_category_ids = serializers.ListField(
        child=serializers.IntegerField(),
        source="properties.exclude_product_category_ids",
        read_only=True,
    )
    exclude_sale_items = serializers.BooleanField(
        source="properties.exclude_sale_items", read_only=True
    )
    minimum_amount = serializers.SerializerMethodField()
    customer_emails = serializers.ListField(
        child=serializers.CharField(), source="properties.customer_emails", read_only=True
    )

    def __init__(self, *args, **kwargs):
        fields = kwargs.pop("fields", None)
        super().__init__(*args, **kwargs)

        if fields:
            allowed = set(fields)
            for field_name in set(self.fields) - allowed:
                self.fields.pop(field_name)

    def get_created_at(self, obj):
        return format_datetime(obj.created_at)

    def get_updated_at(self, obj):
        return format_datetime(obj.updated_at)

    def get_amount(self, obj):
        return format_decimal(obj.properties["amount"])

    def get_minimum_amount(self, obj):
        return format_decimal(obj.properties["minimum_amount"])

    def get_expiry_date(self, obj):
        return format_datetime(obj.properties["expiry_date"])
