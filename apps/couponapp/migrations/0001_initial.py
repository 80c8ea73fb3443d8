import django.db.models.deletion
import django.db.models.functions.text
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Coupon",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("code", models.CharField(max_length=200, verbose_name="Code")),
                (
                    "status",
                    models.CharField(
                        choices=[("publish", "Published"), ("draft", "Draft"), ("trash", "Trash")],
                        default="publish",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated At")),
                (
                    "author",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="coupons",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="Author",
                    ),
                ),
            ],
            options={
                "verbose_name": "Coupon",
                "verbose_name_plural": "Coupons",
                "ordering": ["-created_at", "-id"],
                "permissions": (
                    ("read_private_coupons", "Can read private coupons"),
                    ("publish_coupons", "Can publish coupons"),
                ),
                "indexes": [
                    models.Index(fields=["status", "created_at"], name="coupon_status_created_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        django.db.models.functions.text.Lower("code"),
                        condition=models.Q(("status", "publish")),
                        name="unique_published_coupon_code",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="CouponMeta",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("meta_key", models.CharField(max_length=255, verbose_name="Key")),
                ("meta_value", models.TextField(blank=True, default="", verbose_name="Value")),
                (
                    "coupon",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="meta",
                        to="couponapp.coupon",
                        verbose_name="Coupon",
                    ),
                ),
            ],
            options={
                "verbose_name": "Coupon Meta",
                "verbose_name_plural": "Coupon Meta",
                "constraints": [
                    models.UniqueConstraint(
                        fields=("coupon", "meta_key"), name="unique_coupon_meta_key"
                    ),
                ],
            },
        ),
    ]
