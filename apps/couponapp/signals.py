# apps/couponapp/signals.py
"""
Post-commit coupon notifications.

Mutations call ``notify`` which defers dispatch until the surrounding
transaction commits. Receivers run through ``send_robust``; their failures are
logged and never reach the API caller.
"""

import logging

from django.db import transaction
from django.dispatch import Signal, receiver

from apps.couponapp.constants import EVENT_CREATED, EVENT_DELETED, EVENT_UPDATED

logger = logging.getLogger(__name__)

# Receivers get: event, coupon_id, payload
coupon_created = Signal()
coupon_updated = Signal()
coupon_deleted = Signal()

EVENT_SIGNALS = {
    EVENT_CREATED: coupon_created,
    EVENT_UPDATED: coupon_updated,
    EVENT_DELETED: coupon_deleted,
}


def dispatch(event, coupon_id, payload=None):
    """Send ``event`` to its receivers now, logging any receiver failure."""
    signal = EVENT_SIGNALS[event]
    responses = signal.send_robust(
        sender=None, event=event, coupon_id=coupon_id, payload=payload or {}
    )
    for handler, response in responses:
        if isinstance(response, Exception):
            logger.error(
                "Coupon notification handler %r failed for %s (coupon %s): %s",
                handler,
                event,
                coupon_id,
                response,
                exc_info=(type(response), response, response.__traceback__),
            )
    return responses


def notify(event, coupon_id, payload=None):
    """Dispatch ``event`` once the current transaction commits."""
    payload = dict(payload or {})
    transaction.on_commit(lambda: dispatch(event, coupon_id, payload))


@receiver(coupon_created)
@receiver(coupon_updated)
@receiver(coupon_deleted)
def log_coupon_event(sender, event, coupon_id, payload, **kwargs):
    logger.info("Coupon event %s for coupon %s", event, coupon_id)
