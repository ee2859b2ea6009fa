from __future__ import annotations

from typing import Any, Optional

import stripe

from ..core.enums import SubscriptionEvent
from ..core.exceptions import BillingProviderError, ValidationError
from .model import ActiveSubscription, RecurringPrice, SubscriptionChange

_HANDLED_EVENTS = {e.value for e in SubscriptionEvent}


def _field(obj: Any, *path: Any) -> Any:
    """Walk nested Stripe objects by key/index, ``None`` when any hop is missing."""
    for key in path:
        if obj is None:
            return None
        try:
            obj = obj[key]
        except (KeyError, IndexError, TypeError, AttributeError):
            return None
    return obj


def _period_end(subscription: Any) -> Optional[int]:
    # Newer API versions moved the billing period onto the subscription items.
    return _field(subscription, "current_period_end") or _field(
        subscription, "items", "data", 0, "current_period_end"
    )


class StripeGateway:
    def __init__(self, secret_key: Optional[str], *, webhook_secret: Optional[str] = None):
        self._secret_key = secret_key
        self._webhook_secret = webhook_secret

    def _require_key(self) -> str:
        if not self._secret_key:
            raise BillingProviderError("Stripe is not configured")
        return self._secret_key

    def active_subscription(self, customer_id: str) -> Optional[ActiveSubscription]:
        api_key = self._require_key()
        try:
            subscriptions = stripe.Subscription.list(
                customer=customer_id,
                status="active",
                limit=1,
                api_key=api_key,
            )
        except stripe.StripeError as exc:
            raise BillingProviderError("Stripe subscription lookup failed") from exc

        subscription = _field(subscriptions, "data", 0)
        if subscription is None or _field(subscription, "items", "data", 0) is None:
            return None

        return ActiveSubscription(
            subscription_id=str(_field(subscription, "id")),
            plan_id=_field(subscription, "items", "data", 0, "price", "product"),
            current_period_end=_period_end(subscription),
        )

    def recurring_price(self, product_id: str) -> Optional[RecurringPrice]:
        api_key = self._require_key()
        try:
            prices = stripe.Price.list(
                product=product_id,
                active=True,
                type="recurring",
                api_key=api_key,
            )
        except stripe.StripeError as exc:
            raise BillingProviderError("Stripe price lookup failed") from exc

        price = _field(prices, "data", 0)
        if price is None:
            return None
        return RecurringPrice(unit_amount=_field(price, "unit_amount"), currency=_field(price, "currency") or "")

    def parse_subscription_event(self, payload: bytes, signature: Optional[str]) -> Optional[SubscriptionChange]:
        """Verify a webhook and decode it; ``None`` for events we do not track."""
        if not self._webhook_secret:
            raise BillingProviderError("Stripe webhook secret is not configured")
        if not signature:
            raise ValidationError("Missing Stripe signature")

        try:
            event = stripe.Webhook.construct_event(payload, signature, self._webhook_secret)
        except ValueError as exc:
            raise ValidationError("Invalid payload") from exc
        except stripe.SignatureVerificationError as exc:
            raise ValidationError("Invalid signature") from exc

        event_type = _field(event, "type")
        if event_type not in _HANDLED_EVENTS:
            return None

        subscription = _field(event, "data", "object")
        return SubscriptionChange(
            event_type=event_type,
            user_id=_field(subscription, "metadata", "userId"),
            customer_id=_field(subscription, "customer"),
            subscription_id=_field(subscription, "id"),
            status=_field(subscription, "status"),
            plan_id=_field(subscription, "items", "data", 0, "price", "product"),
            current_period_end=_period_end(subscription),
        )
