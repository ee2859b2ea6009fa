from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol

from ..common.datetime_utils import to_iso
from ..common.validators import require_non_empty
from ..core.constants import STRIPE_CUSTOMER_ID_KEY, SUBSCRIPTION_METADATA_KEY
from ..core.exceptions import NotFound
from ..core.logging import get_logger
from ..identity.adapter import IdentityProviderAdapter
from .model import ActiveSubscription, RecurringPrice, SubscriptionChange

log = get_logger(__name__)


class BillingGateway(Protocol):
    def active_subscription(self, customer_id: str) -> Optional[ActiveSubscription]:
        raise NotImplementedError

    def recurring_price(self, product_id: str) -> Optional[RecurringPrice]:
        raise NotImplementedError

    def parse_subscription_event(self, payload: bytes, signature: Optional[str]) -> Optional[SubscriptionChange]:
        raise NotImplementedError


def _epoch_to_iso(value: Optional[int]) -> Optional[str]:
    if value is None:
        return None
    return to_iso(datetime.fromtimestamp(int(value), tz=timezone.utc))


class SubscriptionService:
    """Use cases: subscription status, pricing, and keeping metadata in sync."""

    def __init__(self, identity: IdentityProviderAdapter, gateway: BillingGateway):
        self._identity = identity
        self._gateway = gateway

    def check_subscription(self, user_id: str) -> Dict[str, Any]:
        metadata = self._identity.get_private_metadata(user_id)
        subscription_meta = metadata.get(SUBSCRIPTION_METADATA_KEY) or {}
        customer_id = metadata.get(STRIPE_CUSTOMER_ID_KEY) or subscription_meta.get(STRIPE_CUSTOMER_ID_KEY)
        if not customer_id:
            return {"isActive": False}

        subscription = self._gateway.active_subscription(str(customer_id))
        if subscription is None:
            return {"isActive": False}

        return {
            "isActive": True,
            "planId": subscription.plan_id,
            "expiresAt": _epoch_to_iso(subscription.current_period_end),
        }

    def get_price(self, product_id: Optional[str]) -> Dict[str, Any]:
        product_id = require_non_empty(product_id, "Product ID")
        price = self._gateway.recurring_price(product_id)
        if price is None:
            raise NotFound("No price found for this product")
        return {"price": price.unit_amount, "currency": price.currency}

    def handle_webhook(self, payload: bytes, signature: Optional[str]) -> Optional[str]:
        """Apply a subscription event to the subscriber's metadata.

        Returns the handled event type, or ``None`` when nothing was applied.
        """
        change = self._gateway.parse_subscription_event(payload, signature)
        if change is None:
            return None
        if not change.user_id:
            log.warning("subscription_event_without_user", event_type=change.event_type, customer=change.customer_id)
            return None

        self._identity.merge_subscription_metadata(
            change.user_id,
            {
                "stripeCustomerId": change.customer_id,
                "subscriptionId": change.subscription_id,
                "status": change.status,
                "planId": change.plan_id,
                "currentPeriodEnd": _epoch_to_iso(change.current_period_end),
            },
        )
        return change.event_type
