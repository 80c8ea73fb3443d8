# apps/couponapp/constants.py
from django.utils.translation import gettext_lazy as _

# Coupon Status Constants
STATUS_PUBLISH = "publish"
STATUS_DRAFT = "draft"
STATUS_TRASH = "trash"

# Built-in Coupon Types
TYPE_FIXED_CART = "fixed_cart"
TYPE_PERCENT = "percent"
TYPE_FIXED_PRODUCT = "fixed_product"
TYPE_PERCENT_PRODUCT = "percent_product"

DEFAULT_COUPON_TYPES = {
    TYPE_FIXED_CART: _("Cart Discount"),
    TYPE_PERCENT: _("Cart % Discount"),
    TYPE_FIXED_PRODUCT: _("Product Discount"),
    TYPE_PERCENT_PRODUCT: _("Product % Discount"),
}

# Authorizer actions
ACTION_READ = "read"
ACTION_READ_PRIVATE = "read_private"
ACTION_PUBLISH = "publish"
ACTION_EDIT = "edit"
ACTION_DELETE = "delete"

# Notification events
EVENT_CREATED = "coupon.created"
EVENT_UPDATED = "coupon.updated"
EVENT_DELETED = "coupon.deleted"

# Required on create, checked in this order
REQUIRED_CREATE_FIELDS = ("code", "type", "amount")

# Stored yes/no tokens
YES = "yes"
NO = "no"

# Canonical field groups
BOOLEAN_FIELDS = ("individual_use", "apply_before_tax", "free_shipping", "exclude_sale_items")
PRODUCT_ID_FIELDS = ("product_ids", "exclude_product_ids")
CATEGORY_ID_FIELDS = ("product_category_ids", "exclude_product_category_ids")
ID_LIST_FIELDS = PRODUCT_ID_FIELDS + CATEGORY_ID_FIELDS
LIMIT_FIELDS = ("usage_limit", "usage_limit_per_user", "limit_usage_to_x_items")
DECIMAL_FIELDS = ("amount", "minimum_amount")

# External input names mapped to canonical field names
FIELD_ALIASES = {
    "type": "discount_type",
    "enable_free_shipping": "free_shipping",
}

# Response field order
RESPONSE_FIELDS = (
    "id",
    "code",
    "type",
    "created_at",
    "updated_at",
    "amount",
    "individual_use",
    "product_ids",
    "exclude_product_ids",
    "usage_limit",
    "usage_limit_per_user",
    "limit_usage_to_x_items",
    "usage_count",
    "expiry_date",
    "apply_before_tax",
    "free_shipping",
    "product_category_ids",
    "exclude_product_category_ids",
    "exclude_sale_items",
    "minimum_amount",
    "customer_emails",
)

# Coupon codes: a word character followed by word characters, spaces or dashes
COUPON_CODE_PATTERN = r"\w[\w\s\-]*"
MAX_COUPON_CODE_LENGTH = 200

# List ordering
ORDERBY_FIELDS = ("id", "code", "created_at", "updated_at")
DEFAULT_ORDERBY = "created_at"
DEFAULT_ORDER = "desc"

# Error Messages
ERROR_MISSING_PARAMETER = _("Missing parameter %(field)s")
ERROR_INVALID_TYPE = _("Invalid coupon type - the coupon type must be: %(types)s")
ERROR_INVALID_FIELD = _("Invalid value for %(field)s")
ERROR_DUPLICATE_CODE = _(
    "Coupon code already exists - customers will use the latest coupon with this code."
)
ERROR_INVALID_ID = _("Invalid coupon ID")
ERROR_INVALID_CODE = _("Invalid coupon code")
ERROR_FORBIDDEN = _("You do not have permission to %(operation)s")
ERROR_STORAGE = _("The coupon store could not complete the request")

# Success Messages
SUCCESS_COUPON_TRASHED = _("Deleted coupon")
SUCCESS_COUPON_DELETED = _("Permanently deleted coupon")
