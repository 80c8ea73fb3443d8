# apps/couponapp/tests/test_services.py
from unittest import mock

from django.contrib.auth.models import AnonymousUser
from django.test import TestCase

from apps.couponapp.constants import (
    ACTION_DELETE,
    ACTION_EDIT,
    ACTION_PUBLISH,
    ACTION_READ,
    ACTION_READ_PRIVATE,
    EVENT_CREATED,
    EVENT_DELETED,
    EVENT_UPDATED,
    STATUS_DRAFT,
    STATUS_TRASH,
)
from apps.couponapp.exceptions import (
    CouponForbidden,
    CouponNotFound,
    DuplicateCouponCode,
    InvalidCouponType,
    InvalidFieldFormat,
    MissingParameter,
)
from apps.couponapp.models import Coupon
from apps.couponapp.permissions import Authorizer, DjangoPermissionAuthorizer
from apps.couponapp.services.coupon_service import CouponResourceService
from apps.couponapp.signals import coupon_created, coupon_deleted, coupon_updated
from apps.couponapp.tests.factories import CouponFactory, UserFactory, grant_coupon_permissions

ALL_ACTIONS = (ACTION_READ, ACTION_READ_PRIVATE, ACTION_PUBLISH, ACTION_EDIT, ACTION_DELETE)


class StaticAuthorizer(Authorizer):
    """Allows a fixed set of actions, optionally hiding some coupons from reads."""

    def __init__(self, allowed=ALL_ACTIONS, unreadable=()):
        self.allowed = set(allowed)
        self.unreadable = set(unreadable)

    def can(self, user, action, coupon=None):
        if action == ACTION_READ and coupon is not None and coupon.pk in self.unreadable:
            return False
        return action in self.allowed


class CouponServiceTestCase(TestCase):
    def setUp(self):
        self.user = UserFactory()
        self.service = CouponResourceService(self.user, authorizer=StaticAuthorizer())

    def create(self, **data):
        payload = {"code": "SAVE10", "type": "percent", "amount": "10"}
        payload.update(data)
        return self.service.create_coupon(payload)["coupon"]


class CreateCouponTest(CouponServiceTestCase):
    def test_create_minimal_coupon(self):
        """Test canonical rendering of a minimal coupon"""
        coupon = self.create()

        self.assertEqual(coupon["code"], "SAVE10")
        self.assertEqual(coupon["type"], "percent")
        self.assertEqual(coupon["amount"], "10.00")
        self.assertIsNone(coupon["usage_limit"])
        self.assertFalse(coupon["individual_use"])
        self.assertEqual(coupon["usage_count"], 0)
        self.assertEqual(coupon["minimum_amount"], "0.00")
        self.assertIsNone(coupon["expiry_date"])
        self.assertRegex(coupon["created_at"], r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$")

    def test_get_after_create_returns_identical_fields(self):
        """Test the create response matches a later Get"""
        created = self.create(
            individual_use="yes",
            product_ids=[5, 2, 5],
            exclude_product_category_ids=[8],
            usage_limit_per_user=2,
            expiry_date="2031-06-30",
            customer_emails=["vip@example.com", "broken"],
            enable_free_shipping=True,
        )

        fetched = self.service.get_coupon(created["id"])["coupon"]

        self.assertEqual(fetched, created)
        self.assertEqual(fetched["product_ids"], [5, 2])
        self.assertTrue(fetched["free_shipping"])
        self.assertEqual(fetched["expiry_date"], "2031-06-30T00:00:00Z")
        self.assertEqual(fetched["customer_emails"], ["vip@example.com"])

    def test_code_hooks_run_before_storage(self):
        """Test the default hook trims the submitted code"""
        coupon = self.create(code="  SPRING SALE-1  ")
        self.assertEqual(coupon["code"], "SPRING SALE-1")

    def test_coupon_envelope_is_accepted(self):
        result = self.service.create_coupon(
            {"coupon": {"code": "WRAPPED", "discount_type": "fixed_cart", "amount": 5}}
        )
        self.assertEqual(result["coupon"]["type"], "fixed_cart")

    def test_usage_limit_zero_is_null(self):
        """Test zero usage limits come back as null"""
        coupon = self.create(usage_limit=0, usage_limit_per_user="0")

        self.assertIsNone(coupon["usage_limit"])
        self.assertIsNone(coupon["usage_limit_per_user"])

    def test_duplicate_code(self):
        """Test a second coupon with the same code is rejected"""
        self.create()

        with self.assertRaises(DuplicateCouponCode):
            self.create(code="save10")
        self.assertEqual(Coupon.objects.count(), 1)

    def test_missing_parameters_in_order(self):
        """Test the first missing required field is reported"""
        cases = [
            ({}, "code"),
            ({"code": "  ", "type": "percent", "amount": "1"}, "code"),
            ({"code": "X1", "amount": "1"}, "type"),
            ({"code": "X1", "type": "percent"}, "amount"),
            ({"code": "X1", "type": "percent", "amount": ""}, "amount"),
        ]
        for payload, field in cases:
            with self.assertRaises(MissingParameter) as ctx:
                self.service.create_coupon(payload)
            self.assertEqual(ctx.exception.field, field, payload)

    def test_unregistered_type(self):
        """Test an unknown type fails regardless of other fields"""
        with self.assertRaises(InvalidCouponType) as ctx:
            self.service.create_coupon({"code": "X1", "type": "bogus", "amount": "nope"})

        self.assertIn("percent", ctx.exception.allowed)
        self.assertFalse(Coupon.objects.exists())

    def test_invalid_code_format(self):
        for code in ("-leading-dash", "bad!code", "\t"):
            with self.assertRaises((InvalidFieldFormat, MissingParameter)):
                self.service.create_coupon({"code": code, "type": "percent", "amount": "1"})
        self.assertFalse(Coupon.objects.exists())

    def test_invalid_amount(self):
        with self.assertRaises(InvalidFieldFormat) as ctx:
            self.create(amount="-3")
        self.assertEqual(ctx.exception.field, "amount")

    def test_create_requires_publish_capability(self):
        service = CouponResourceService(
            self.user, authorizer=StaticAuthorizer(allowed=[ACTION_READ])
        )

        with self.assertRaises(CouponForbidden) as ctx:
            service.create_coupon({"code": "X1", "type": "percent", "amount": "1"})

        self.assertEqual(ctx.exception.status_code, 401)
        self.assertFalse(Coupon.objects.exists())

    def test_author_is_recorded(self):
        coupon = self.create()
        self.assertEqual(Coupon.objects.get(pk=coupon["id"]).author, self.user)


class ReadCouponTest(CouponServiceTestCase):
    def test_get_by_code(self):
        """Test resolving a coupon by code, case-insensitively"""
        created = self.create()

        result = self.service.get_coupon_by_code("save10")

        self.assertEqual(result["coupon"]["id"], created["id"])

    def test_get_by_unknown_code(self):
        with self.assertRaises(CouponNotFound):
            self.service.get_coupon_by_code("NOPE")

    def test_invalid_ids_are_not_found(self):
        for coupon_id in ("abc", 0, -4, None, 987654):
            with self.assertRaises(CouponNotFound):
                self.service.get_coupon(coupon_id)

    def test_draft_and_trashed_coupons_are_invisible(self):
        """Test non-published coupons cannot be read"""
        draft = CouponFactory(status=STATUS_DRAFT)
        trashed = CouponFactory(status=STATUS_TRASH)

        for coupon in (draft, trashed):
            with self.assertRaises(CouponNotFound):
                self.service.get_coupon(coupon.pk)

    def test_get_requires_read_capability(self):
        coupon = CouponFactory()
        service = CouponResourceService(self.user, authorizer=StaticAuthorizer(allowed=[]))

        with self.assertRaises(CouponForbidden):
            service.get_coupon(coupon.pk)

    def test_field_selection(self):
        coupon = CouponFactory()

        result = self.service.get_coupon(coupon.pk, fields=["id", "code"])

        self.assertEqual(result, {"coupon": {"id": coupon.pk, "code": coupon.code}})

    def test_list_with_no_matches(self):
        """Test an empty listing is not an error"""
        CouponFactory(code="ALPHA")

        payload, page_info = self.service.list_coupons({"code": "OMEGA"}, page=1, per_page=10)

        self.assertEqual(payload, {"coupons": []})
        self.assertEqual(page_info["total"], 0)
        self.assertEqual(page_info["total_pages"], 0)

    def test_list_omits_unreadable_coupons(self):
        """Test per-coupon read failures are silently dropped"""
        visible = CouponFactory()
        hidden = CouponFactory()
        service = CouponResourceService(
            self.user, authorizer=StaticAuthorizer(unreadable=[hidden.pk])
        )

        payload, page_info = service.list_coupons({}, page=1, per_page=10)

        self.assertEqual([item["id"] for item in payload["coupons"]], [visible.pk])
        self.assertEqual(page_info["total"], 2)

    def test_list_page_info(self):
        for _ in range(3):
            CouponFactory()

        payload, page_info = self.service.list_coupons({}, page=2, per_page=2)

        self.assertEqual(len(payload["coupons"]), 1)
        self.assertEqual(page_info, {"total": 3, "total_pages": 2, "page": 2, "per_page": 2})

    def test_count(self):
        CouponFactory(fields={"type": "percent"})
        CouponFactory(fields={"type": "fixed_cart"})
        CouponFactory(status=STATUS_TRASH)

        self.assertEqual(self.service.count_coupons({}), {"count": 2})
        self.assertEqual(self.service.count_coupons({"type": "percent"}), {"count": 1})

    def test_count_checks_capability_before_data_access(self):
        """Test count is refused without touching the repository"""
        repository = mock.Mock()
        service = CouponResourceService(
            self.user,
            authorizer=StaticAuthorizer(allowed=[ACTION_READ]),
            repository=repository,
        )

        with self.assertRaises(CouponForbidden):
            service.count_coupons({})

        repository.count.assert_not_called()


class EditCouponTest(CouponServiceTestCase):
    def test_partial_edit_merges_with_existing(self):
        """Test only submitted fields change"""
        created = self.create(individual_use=True, usage_limit=5)

        edited = self.service.edit_coupon(created["id"], {"amount": "12.5"})["coupon"]

        self.assertEqual(edited["amount"], "12.50")
        self.assertTrue(edited["individual_use"])
        self.assertEqual(edited["usage_limit"], 5)
        self.assertEqual(edited["code"], "SAVE10")

    def test_edit_code_to_another_coupons_code(self):
        """Test the guard rejects a code held by another coupon"""
        self.create(code="FIRST")
        second = self.create(code="SECOND")

        with self.assertRaises(DuplicateCouponCode):
            self.service.edit_coupon(second["id"], {"code": "first"})

    def test_edit_code_to_own_code(self):
        """Test the guard excludes the coupon being edited"""
        created = self.create()

        edited = self.service.edit_coupon(created["id"], {"code": "save10"})["coupon"]

        self.assertEqual(edited["code"], "save10")

    def test_edit_with_unregistered_type(self):
        created = self.create()

        with self.assertRaises(InvalidCouponType):
            self.service.edit_coupon(created["id"], {"type": "bogus"})

    def test_edit_with_null_type_keeps_existing(self):
        created = self.create(type="fixed_cart")

        edited = self.service.edit_coupon(created["id"], {"type": None, "amount": "4"})["coupon"]

        self.assertEqual(edited["type"], "fixed_cart")
        self.assertEqual(edited["amount"], "4.00")

    def test_failed_edit_writes_nothing(self):
        """Test validation failures leave the coupon untouched"""
        created = self.create()

        with self.assertRaises(InvalidFieldFormat):
            self.service.edit_coupon(created["id"], {"code": "RENAMED", "minimum_amount": "-1"})

        current = self.service.get_coupon(created["id"])["coupon"]
        self.assertEqual(current["code"], "SAVE10")
        self.assertEqual(current, created)

    def test_edit_requires_capability(self):
        coupon = CouponFactory()
        service = CouponResourceService(
            self.user, authorizer=StaticAuthorizer(allowed=[ACTION_READ])
        )

        with self.assertRaises(CouponForbidden):
            service.edit_coupon(coupon.pk, {"amount": "1"})

    def test_edit_trashed_coupon(self):
        coupon = CouponFactory(status=STATUS_TRASH)

        with self.assertRaises(CouponNotFound):
            self.service.edit_coupon(coupon.pk, {"amount": "1"})


class DeleteCouponTest(CouponServiceTestCase):
    def test_soft_delete_frees_code(self):
        """Test trashing hides the coupon and frees its code"""
        created = self.create()

        result = self.service.delete_coupon(created["id"])

        self.assertEqual(result["id"], created["id"])
        self.assertTrue(result["deleted"])
        self.assertFalse(result["permanent"])
        with self.assertRaises(CouponNotFound):
            self.service.get_coupon(created["id"])

        recreated = self.create()
        self.assertNotEqual(recreated["id"], created["id"])

    def test_force_delete(self):
        created = self.create()

        result = self.service.delete_coupon(created["id"], force=True)

        self.assertTrue(result["permanent"])
        self.assertFalse(Coupon.objects.filter(pk=created["id"]).exists())

    def test_trashed_coupon_needs_force(self):
        """Test a trashed coupon can only be removed permanently"""
        coupon = CouponFactory(status=STATUS_TRASH)

        with self.assertRaises(CouponNotFound):
            self.service.delete_coupon(coupon.pk)

        self.service.delete_coupon(coupon.pk, force=True)
        self.assertFalse(Coupon.objects.filter(pk=coupon.pk).exists())

    def test_draft_cannot_be_deleted(self):
        coupon = CouponFactory(status=STATUS_DRAFT)

        with self.assertRaises(CouponNotFound):
            self.service.delete_coupon(coupon.pk, force=True)

    def test_delete_requires_capability(self):
        coupon = CouponFactory()
        service = CouponResourceService(
            self.user, authorizer=StaticAuthorizer(allowed=[ACTION_READ])
        )

        with self.assertRaises(CouponForbidden):
            service.delete_coupon(coupon.pk)
        self.assertTrue(Coupon.objects.get(pk=coupon.pk).is_published)


class CouponNotificationTest(CouponServiceTestCase):
    def setUp(self):
        super().setUp()
        self.events = []
        for signal in (coupon_created, coupon_updated, coupon_deleted):
            signal.connect(self.record_event, weak=False)
            self.addCleanup(signal.disconnect, self.record_event)

    def record_event(self, sender, event, coupon_id, payload, **kwargs):
        self.events.append((event, coupon_id, payload))

    def test_events_fire_after_commit(self):
        """Test each mutation notifies with the id and original payload"""
        with self.captureOnCommitCallbacks(execute=True):
            created = self.create()
        with self.captureOnCommitCallbacks(execute=True):
            self.service.edit_coupon(created["id"], {"amount": "3"})
        with self.captureOnCommitCallbacks(execute=True):
            self.service.delete_coupon(created["id"])

        self.assertEqual(
            self.events,
            [
                (EVENT_CREATED, created["id"], {"code": "SAVE10", "type": "percent", "amount": "10"}),
                (EVENT_UPDATED, created["id"], {"amount": "3"}),
                (EVENT_DELETED, created["id"], {"force": False}),
            ],
        )

    def test_nothing_is_sent_before_commit(self):
        with self.captureOnCommitCallbacks(execute=False) as callbacks:
            self.create()

        self.assertEqual(len(callbacks), 1)
        self.assertEqual(self.events, [])

    def test_failed_validation_sends_nothing(self):
        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            with self.assertRaises(MissingParameter):
                self.service.create_coupon({"code": "X1"})

        self.assertEqual(callbacks, [])
        self.assertEqual(self.events, [])

    def test_failing_receiver_does_not_fail_the_call(self):
        """Test notifications are best-effort"""

        def explode(sender, **kwargs):
            raise RuntimeError("receiver down")

        coupon_created.connect(explode, weak=False)
        self.addCleanup(coupon_created.disconnect, explode)

        with self.captureOnCommitCallbacks(execute=True):
            created = self.create()

        self.assertTrue(Coupon.objects.filter(pk=created["id"]).exists())
        self.assertEqual(self.events[0][0], EVENT_CREATED)


class DjangoPermissionAuthorizerTest(TestCase):
    def setUp(self):
        self.authorizer = DjangoPermissionAuthorizer()

    def test_permissions_map_to_actions(self):
        user = grant_coupon_permissions(UserFactory(), "view_coupon", "publish_coupons")

        self.assertTrue(self.authorizer.can(user, ACTION_READ))
        self.assertTrue(self.authorizer.can(user, ACTION_PUBLISH))
        self.assertFalse(self.authorizer.can(user, ACTION_READ_PRIVATE))
        self.assertFalse(self.authorizer.can(user, ACTION_EDIT))
        self.assertFalse(self.authorizer.can(user, ACTION_DELETE))

    def test_per_coupon_check_uses_model_permission(self):
        user = grant_coupon_permissions(UserFactory(), "view_coupon")
        coupon = CouponFactory()

        self.assertTrue(self.authorizer.can(user, ACTION_READ, coupon))

    def test_superuser_can_do_everything(self):
        user = UserFactory(is_superuser=True)

        for action in ALL_ACTIONS:
            self.assertTrue(self.authorizer.can(user, action))

    def test_inactive_and_anonymous_users_are_denied(self):
        inactive = grant_coupon_permissions(UserFactory(is_active=False))

        self.assertFalse(self.authorizer.can(inactive, ACTION_READ))
        self.assertFalse(self.authorizer.can(AnonymousUser(), ACTION_READ))
        self.assertFalse(self.authorizer.can(None, ACTION_READ))

    def test_unknown_action_is_denied(self):
        user = UserFactory(is_superuser=True)
        self.assertFalse(self.authorizer.can(user, "launch"))
