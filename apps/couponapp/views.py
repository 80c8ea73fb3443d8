"""
Coupon app views

Exposes the coupon resource: list, count, create, get by id or code, edit and
delete. All business rules live in ``CouponResourceService``; the views only
translate HTTP parameters and envelopes.
"""

# apps/couponapp/views.py
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.couponapp.api_docs import (
    count_coupons_docs,
    coupon_detail_docs,
    create_coupon_docs,
    delete_coupon_docs,
    list_coupons_docs,
    update_coupon_docs,
)
from apps.couponapp.conf import get_setting
from apps.couponapp.constants import COUPON_CODE_PATTERN
from apps.couponapp.services.coupon_service import CouponResourceService
from apps.couponapp.services.field_normalizer import to_bool
from core.utils.pagination import add_pagination_headers


class CouponViewSet(viewsets.ViewSet):
    """
    API endpoint for coupons

    Endpoints:
    - GET /api/v1/coupons/ - List published coupons
    - POST /api/v1/coupons/ - Create a coupon
    - GET /api/v1/coupons/count/ - Count published coupons
    - GET /api/v1/coupons/{id}/ - Get a coupon
    - PUT/PATCH /api/v1/coupons/{id}/ - Edit a coupon
    - DELETE /api/v1/coupons/{id}/ - Trash (or with force, delete) a coupon
    - GET /api/v1/coupons/code/{code}/ - Get a coupon by its code

    Permissions:
    - Authentication required for all actions
    - Per-operation capabilities are decided by the configured authorizer
    """

    permission_classes = [permissions.IsAuthenticated]
    lookup_value_regex = r"\d+"

    def get_service(self):
        return CouponResourceService(self.request.user)

    def get_fields_param(self):
        fields = self.request.query_params.get("fields")
        if not fields:
            return None
        return [field.strip() for field in fields.split(",") if field.strip()]

    def get_page_params(self):
        """Return ``(page, per_page)`` from the ``page`` and ``limit`` params."""
        params = self.request.query_params
        default_size = get_setting("PAGE_SIZE")

        try:
            page = int(params.get("page", 1))
        except (TypeError, ValueError):
            page = 1

        try:
            per_page = int(params.get("limit", default_size))
        except (TypeError, ValueError):
            per_page = default_size

        if page < 1:
            page = 1
        if per_page < 1:
            per_page = default_size
        return page, min(per_page, get_setting("MAX_PAGE_SIZE"))

    @list_coupons_docs
    def list(self, request):
        page, per_page = self.get_page_params()
        payload, page_info = self.get_service().list_coupons(
            request.query_params, page=page, per_page=per_page, fields=self.get_fields_param()
        )

        response = Response(payload)
        return add_pagination_headers(
            response, request, page_info["total"], page_info["total_pages"], page
        )

    @create_coupon_docs
    def create(self, request):
        payload = self.get_service().create_coupon(request.data)
        return Response(payload, status=status.HTTP_201_CREATED)

    @coupon_detail_docs
    def retrieve(self, request, pk=None):
        return Response(self.get_service().get_coupon(pk, fields=self.get_fields_param()))

    @update_coupon_docs
    def update(self, request, pk=None):
        return Response(self.get_service().edit_coupon(pk, request.data))

    @update_coupon_docs
    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    @delete_coupon_docs
    def destroy(self, request, pk=None):
        force = request.query_params.get("force")
        if force is None and hasattr(request.data, "get"):
            force = request.data.get("force")
        return Response(self.get_service().delete_coupon(pk, force=to_bool(force)))

    @count_coupons_docs
    @action(detail=False, methods=["get"])
    def count(self, request):
        return Response(self.get_service().count_coupons(request.query_params))

    @coupon_detail_docs
    @action(
        detail=False,
        methods=["get"],
        url_path=rf"code/(?P<code>{COUPON_CODE_PATTERN})",
        url_name="by-code",
    )
    def by_code(self, request, code=None):
        return Response(
            self.get_service().get_coupon_by_code(code, fields=self.get_fields_param())
        )
