from __future__ import annotations

from enum import Enum


class EntityType(str, Enum):
    """Tenant-owned collections reachable through the data access gate."""

    WORK_TIME_SHIFT = "work_time_shift"
    ROUTE = "route"
    ROUTE_SHIFT_INFO = "route_shift_info"
    EMPLOYEE = "employee"


class SubscriptionEvent(str, Enum):
    """Stripe webhook events that update subscription metadata."""

    CREATED = "customer.subscription.created"
    UPDATED = "customer.subscription.updated"
    DELETED = "customer.subscription.deleted"
