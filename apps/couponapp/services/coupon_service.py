# apps/couponapp/services/coupon_service.py
"""
Coupon resource lifecycle: list, get, get-by-code, count, create, edit, delete.

Every operation validates and authorizes before touching storage for writes,
so a failed request never leaves a partially updated coupon behind.
"""

import logging
import math

from django.utils.translation import gettext_lazy as _

from apps.couponapp.constants import (
    ACTION_DELETE,
    ACTION_EDIT,
    ACTION_PUBLISH,
    ACTION_READ,
    ACTION_READ_PRIVATE,
    ERROR_INVALID_CODE,
    ERROR_INVALID_ID,
    EVENT_CREATED,
    EVENT_DELETED,
    EVENT_UPDATED,
    FIELD_ALIASES,
    REQUIRED_CREATE_FIELDS,
    STATUS_PUBLISH,
    STATUS_TRASH,
    SUCCESS_COUPON_DELETED,
    SUCCESS_COUPON_TRASHED,
)
from apps.couponapp.coupon_types import get_coupon_types, is_valid_coupon_type
from apps.couponapp.exceptions import (
    CouponForbidden,
    CouponNotFound,
    DuplicateCouponCode,
    InvalidCouponType,
    InvalidFieldFormat,
    MissingParameter,
)
from apps.couponapp.hooks import apply_code_hooks
from apps.couponapp.permissions import get_authorizer
from apps.couponapp.serializers import CouponSerializer
from apps.couponapp.services.coupon_repository import CouponRepository
from apps.couponapp.services.field_normalizer import CouponFieldNormalizer
from apps.couponapp.services.uniqueness_guard import CouponCodeGuard
from apps.couponapp.signals import notify
from apps.couponapp.validators import validate_coupon_code

logger = logging.getLogger(__name__)

# Input names accepted for each required create field
REQUIRED_FIELD_ALIASES = {
    field: (field, FIELD_ALIASES[field]) if field in FIELD_ALIASES else (field,)
    for field in REQUIRED_CREATE_FIELDS
}


def unwrap_payload(data):
    """Accept both ``{"coupon": {...}}`` and a bare field map."""
    if hasattr(data, "dict"):
        # Form-encoded bodies arrive as QueryDicts
        data = data.dict()
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidFieldFormat("coupon")
    if isinstance(data.get("coupon"), dict):
        return dict(data["coupon"])
    return dict(data)


def _is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


class CouponResourceService:
    """
    Orchestrates authorization, validation and storage for one caller.

    Collaborators are injectable; by default the configured authorizer, the ORM
    repository, the code guard, the field normalizer and the post-commit
    signal notifier are used.
    """

    def __init__(
        self,
        user,
        authorizer=None,
        repository=None,
        guard=None,
        normalizer=None,
        notifier=None,
    ):
        self.user = user
        self.authorizer = authorizer or get_authorizer()
        self.repository = repository or CouponRepository()
        self.guard = guard or CouponCodeGuard(self.repository)
        self.normalizer = normalizer or CouponFieldNormalizer()
        self.notifier = notifier or notify

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_coupons(self, filters=None, page=1, per_page=10, fields=None):
        """
        Return ``({"coupons": [...]}, page_info)``.

        Coupons the caller may not read are left out silently.
        """
        coupons, total = self.repository.list(filters, page=page, per_page=per_page)

        records = [
            self.shape(coupon, fields)
            for coupon in coupons
            if self.authorizer.can(self.user, ACTION_READ, coupon)
        ]

        page_info = {
            "total": total,
            "total_pages": math.ceil(total / per_page) if per_page else 0,
            "page": page,
            "per_page": per_page,
        }
        return {"coupons": records}, page_info

    def get_coupon(self, coupon_id, fields=None):
        coupon = self.validate_request(coupon_id, ACTION_READ, _("read this coupon"))
        return {"coupon": self.shape(coupon, fields)}

    def get_coupon_by_code(self, code, fields=None):
        coupon = self.repository.find_by_code(code) if not _is_blank(code) else None
        if coupon is None:
            raise CouponNotFound(ERROR_INVALID_CODE, lookup=code)
        return self.get_coupon(coupon.pk, fields)

    def count_coupons(self, filters=None):
        self.require(ACTION_READ_PRIVATE, _("read the coupons count"))
        return {"count": self.repository.count(filters)}

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create_coupon(self, data):
        data = unwrap_payload(data)
        self.require(ACTION_PUBLISH, _("create coupons"))

        values = {}
        for field, names in REQUIRED_FIELD_ALIASES.items():
            value = next((data[name] for name in names if not _is_blank(data.get(name))), None)
            if value is None:
                raise MissingParameter(field)
            values[field] = value

        self.validate_coupon_type(values["type"])

        code = self.prepare_code(values["code"])
        if self.guard.check(code):
            raise DuplicateCouponCode(code)

        fields = self.normalizer.normalize(data)
        author = self.user if getattr(self.user, "is_authenticated", False) else None
        coupon_id = self.repository.create(code, fields, author=author)

        self.notifier(EVENT_CREATED, coupon_id, data)
        logger.info("Coupon %s created by user %s", coupon_id, getattr(self.user, "pk", None))

        return self.get_coupon(coupon_id)

    def edit_coupon(self, coupon_id, data):
        data = unwrap_payload(data)
        coupon = self.validate_request(coupon_id, ACTION_EDIT, _("edit this coupon"))

        code = None
        if "code" in data:
            code = self.prepare_code(data["code"])
            if self.guard.check(code, exclude_id=coupon.pk):
                raise DuplicateCouponCode(code)

        for name in ("type", "discount_type"):
            if data.get(name) is not None:
                self.validate_coupon_type(data[name])

        fields = self.normalizer.normalize(data, existing=coupon.properties)
        self.repository.update_fields(coupon.pk, fields, code=code)

        self.notifier(EVENT_UPDATED, coupon.pk, data)
        logger.info("Coupon %s updated by user %s", coupon.pk, getattr(self.user, "pk", None))

        return self.get_coupon(coupon.pk)

    def delete_coupon(self, coupon_id, force=False):
        allowed = (STATUS_PUBLISH, STATUS_TRASH) if force else (STATUS_PUBLISH,)
        coupon = self.validate_request(
            coupon_id, ACTION_DELETE, _("delete this coupon"), statuses=allowed
        )

        if force:
            self.repository.hard_delete(coupon.pk)
            message = SUCCESS_COUPON_DELETED
        else:
            self.repository.soft_delete(coupon.pk)
            message = SUCCESS_COUPON_TRASHED

        self.notifier(EVENT_DELETED, coupon.pk, {"force": force})
        logger.info(
            "Coupon %s %s by user %s",
            coupon.pk,
            "deleted" if force else "trashed",
            getattr(self.user, "pk", None),
        )

        return {"id": coupon.pk, "deleted": True, "permanent": force, "message": str(message)}

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def require(self, action, operation, coupon=None):
        if not self.authorizer.can(self.user, action, coupon):
            raise CouponForbidden(str(operation))

    def validate_request(self, coupon_id, action, operation, statuses=(STATUS_PUBLISH,)):
        """
        Resolve ``coupon_id`` to a coupon in one of ``statuses`` the caller may
        act on.

        Raises:
            CouponNotFound: For malformed ids, missing coupons or coupons in
                any other status (drafts included)
            CouponForbidden: When the authorizer denies ``action``
        """
        if isinstance(coupon_id, bool):
            raise CouponNotFound(ERROR_INVALID_ID, lookup=coupon_id)
        try:
            coupon_id = int(str(coupon_id).strip())
        except (TypeError, ValueError):
            raise CouponNotFound(ERROR_INVALID_ID, lookup=coupon_id)
        if coupon_id <= 0:
            raise CouponNotFound(ERROR_INVALID_ID, lookup=coupon_id)

        coupon = self.repository.find_by_id(coupon_id)
        if coupon is None or coupon.status not in statuses:
            raise CouponNotFound(ERROR_INVALID_ID, lookup=coupon_id)

        self.require(action, operation, coupon)
        return coupon

    def validate_coupon_type(self, coupon_type):
        if isinstance(coupon_type, str):
            coupon_type = coupon_type.strip()
        if not is_valid_coupon_type(coupon_type):
            raise InvalidCouponType(get_coupon_types().keys())

    def prepare_code(self, code):
        """Run the code hooks and validate the result's format."""
        if code is None:
            raise InvalidFieldFormat("code")
        return validate_coupon_code(apply_code_hooks(code))

    def shape(self, coupon, fields=None):
        """External record for ``coupon``, shared by every read path."""
        return dict(CouponSerializer(coupon, fields=fields).data)
