from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ActiveSubscription:
    subscription_id: str
    plan_id: Optional[str]
    current_period_end: Optional[int]


@dataclass(frozen=True)
class RecurringPrice:
    unit_amount: Optional[int]
    currency: str


@dataclass(frozen=True)
class SubscriptionChange:
    """A subscription lifecycle event decoded from a verified webhook."""

    event_type: str
    user_id: Optional[str]
    customer_id: Optional[str]
    subscription_id: Optional[str]
    status: Optional[str]
    plan_id: Optional[str]
    current_period_end: Optional[int]
