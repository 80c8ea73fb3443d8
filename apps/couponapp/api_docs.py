"""
Coupon API Documentation Helpers

Shared drf-yasg (Swagger) decorators and parameters for the coupon endpoints.
"""

from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import serializers

from apps.couponapp.serializers import CouponSerializer


class CouponEnvelope(serializers.Serializer):
    coupon = CouponSerializer()


class CouponListEnvelope(serializers.Serializer):
    coupons = CouponSerializer(many=True)


class CouponCountResponse(serializers.Serializer):
    count = serializers.IntegerField(help_text="Number of matching coupons")


class CouponDeleteResponse(serializers.Serializer):
    id = serializers.IntegerField(help_text="Coupon ID")
    deleted = serializers.BooleanField()
    permanent = serializers.BooleanField(help_text="False when the coupon was moved to the trash")
    message = serializers.CharField()


class CouponInput(serializers.Serializer):
    code = serializers.CharField(help_text="Coupon code, required on create")
    type = serializers.CharField(help_text="Registered coupon type, required on create")
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    individual_use = serializers.BooleanField(required=False)
    product_ids = serializers.ListField(child=serializers.IntegerField(), required=False)
    exclude_product_ids = serializers.ListField(child=serializers.IntegerField(), required=False)
    usage_limit = serializers.IntegerField(required=False, help_text="0 or empty means unlimited")
    usage_limit_per_user = serializers.IntegerField(required=False)
    limit_usage_to_x_items = serializers.IntegerField(required=False)
    expiry_date = serializers.CharField(required=False, help_text="YYYY-MM-DD, empty to clear")
    apply_before_tax = serializers.BooleanField(required=False)
    enable_free_shipping = serializers.BooleanField(required=False)
    product_category_ids = serializers.ListField(child=serializers.IntegerField(), required=False)
    exclude_product_category_ids = serializers.ListField(
        child=serializers.IntegerField(), required=False
    )
    exclude_sale_items = serializers.BooleanField(required=False)
    minimum_amount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    customer_emails = serializers.ListField(child=serializers.EmailField(), required=False)


fields_param = openapi.Parameter(
    "fields",
    openapi.IN_QUERY,
    description="Comma-separated list of fields to return",
    type=openapi.TYPE_STRING,
)

filter_params = [
    openapi.Parameter("status", openapi.IN_QUERY, description="Only 'publish' returns coupons", type=openapi.TYPE_STRING),
    openapi.Parameter("code", openapi.IN_QUERY, description="Exact code (case-insensitive)", type=openapi.TYPE_STRING),
    openapi.Parameter("type", openapi.IN_QUERY, description="Coupon type", type=openapi.TYPE_STRING),
    openapi.Parameter("q", openapi.IN_QUERY, description="Search in coupon codes", type=openapi.TYPE_STRING),
    openapi.Parameter("created_at_min", openapi.IN_QUERY, type=openapi.TYPE_STRING, format=openapi.FORMAT_DATETIME),
    openapi.Parameter("created_at_max", openapi.IN_QUERY, type=openapi.TYPE_STRING, format=openapi.FORMAT_DATETIME),
    openapi.Parameter("updated_at_min", openapi.IN_QUERY, type=openapi.TYPE_STRING, format=openapi.FORMAT_DATETIME),
    openapi.Parameter("updated_at_max", openapi.IN_QUERY, type=openapi.TYPE_STRING, format=openapi.FORMAT_DATETIME),
    openapi.Parameter("orderby", openapi.IN_QUERY, description="id, code, created_at or updated_at", type=openapi.TYPE_STRING),
    openapi.Parameter("order", openapi.IN_QUERY, description="asc or desc", type=openapi.TYPE_STRING),
]

list_coupons_docs = swagger_auto_schema(
    operation_summary="List coupons",
    operation_description=(
        "Returns a page of published coupons. Totals are in the X-Total-Count and "
        "X-Total-Pages headers, navigation in the Link header."
    ),
    manual_parameters=[
        openapi.Parameter("page", openapi.IN_QUERY, description="Page number", type=openapi.TYPE_INTEGER),
        openapi.Parameter("limit", openapi.IN_QUERY, description="Results per page", type=openapi.TYPE_INTEGER),
        fields_param,
        *filter_params,
    ],
    responses={200: openapi.Response("Success", CouponListEnvelope()), 401: "Unauthorized"},
    tags=["Coupons"],
)

count_coupons_docs = swagger_auto_schema(
    operation_summary="Count coupons",
    manual_parameters=filter_params,
    responses={200: openapi.Response("Success", CouponCountResponse()), 401: "Unauthorized"},
    tags=["Coupons"],
)

coupon_detail_docs = swagger_auto_schema(
    operation_summary="Get a coupon",
    manual_parameters=[fields_param],
    responses={
        200: openapi.Response("Success", CouponEnvelope()),
        401: "Unauthorized",
        404: "Not found",
    },
    tags=["Coupons"],
)

create_coupon_docs = swagger_auto_schema(
    operation_summary="Create a coupon",
    request_body=CouponInput,
    responses={
        201: openapi.Response("Created", CouponEnvelope()),
        400: "Bad Request",
        401: "Unauthorized",
    },
    tags=["Coupons"],
)

update_coupon_docs = swagger_auto_schema(
    operation_summary="Edit a coupon",
    operation_description="Only the fields sent are changed.",
    request_body=CouponInput,
    responses={
        200: openapi.Response("Updated", CouponEnvelope()),
        400: "Bad Request",
        401: "Unauthorized",
        404: "Not found",
    },
    tags=["Coupons"],
)

delete_coupon_docs = swagger_auto_schema(
    operation_summary="Delete a coupon",
    operation_description="Moves the coupon to the trash unless force=true.",
    manual_parameters=[
        openapi.Parameter("force", openapi.IN_QUERY, description="Delete permanently", type=openapi.TYPE_BOOLEAN),
    ],
    responses={
        200: openapi.Response("Deleted", CouponDeleteResponse()),
        401: "Unauthorized",
        404: "Not found",
    },
    tags=["Coupons"],
)
