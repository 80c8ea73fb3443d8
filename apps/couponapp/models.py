# apps/couponapp/models.py
from django.conf import settings
from django.db import models
from django.db.models import Q
from django.db.models.functions import Lower
from django.utils.translation import gettext_lazy as _

from apps.couponapp.constants import (
    MAX_COUPON_CODE_LENGTH,
    STATUS_DRAFT,
    STATUS_PUBLISH,
    STATUS_TRASH,
)


class Coupon(models.Model):
    """
    A discount rule identified by a human-facing code.

    Only the identity, lifecycle status and timestamps live on this row; every
    other coupon property is a ``CouponMeta`` key/value row owned by
    ``CouponRepository``.
    """

    STATUS_CHOICES = (
        (STATUS_PUBLISH, _("Published")),
        (STATUS_DRAFT, _("Draft")),
        (STATUS_TRASH, _("Trash")),
    )

    code = models.CharField(_("Code"), max_length=MAX_COUPON_CODE_LENGTH)
    status = models.CharField(
        _("Status"), max_length=20, choices=STATUS_CHOICES, default=STATUS_PUBLISH
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="coupons",
        verbose_name=_("Author"),
    )
    created_at = models.DateTimeField(_("Created At"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated At"), auto_now=True)

    class Meta:
        verbose_name = _("Coupon")
        verbose_name_plural = _("Coupons")
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["status", "created_at"], name="coupon_status_created_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                Lower("code"),
                condition=Q(status=STATUS_PUBLISH),
                name="unique_published_coupon_code",
            ),
        ]
        permissions = (
            ("read_private_coupons", _("Can read private coupons")),
            ("publish_coupons", _("Can publish coupons")),
        )

    def __str__(self):
        return self.code

    @property
    def is_published(self):
        return self.status == STATUS_PUBLISH

    @property
    def is_trashed(self):
        return self.status == STATUS_TRASH


class CouponMeta(models.Model):
    """A single encoded coupon property."""

    coupon = models.ForeignKey(
        Coupon,
        on_delete=models.CASCADE,
        related_name="meta",
        verbose_name=_("Coupon"),
    )
    meta_key = models.CharField(_("Key"), max_length=255)
    meta_value = models.TextField(_("Value"), blank=True, default="")

    class Meta:
        verbose_name = _("Coupon Meta")
        verbose_name_plural = _("Coupon Meta")
        constraints = [
            models.UniqueConstraint(
                fields=["coupon", "meta_key"], name="unique_coupon_meta_key"
            ),
        ]

    def __str__(self):
        return f"{self.coupon_id}:{self.meta_key}"
