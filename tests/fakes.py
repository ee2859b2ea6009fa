from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

import jwt

from src.timecard_system.timecard_system.billing.model import ActiveSubscription, RecurringPrice, SubscriptionChange
from src.timecard_system.timecard_system.container import Container, assemble
from src.timecard_system.timecard_system.core.exceptions import IdentityProviderError, StorageUnavailable
from src.timecard_system.timecard_system.delivery_routes.model import Route, RouteShiftInfo
from src.timecard_system.timecard_system.employees.model import Employee
from src.timecard_system.timecard_system.identity.model import ProviderUser
from src.timecard_system.timecard_system.worktime.model import WorkTimeShift


class SteppingClock:
    """Returns a later instant on every call."""

    def __init__(self, start: datetime = datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc), step_seconds: int = 1):
        self.current = start
        self._step = timedelta(seconds=step_seconds)

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self._step
        return value


class _TenantRows:
    def __init__(self, rows=None):
        self.rows: Dict[str, Any] = {r.id: r for r in (rows or [])}
        self.fail_with: Optional[Exception] = None

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def list_for_tenant(self, organization_id: str):
        self._check()
        return [r for r in self.rows.values() if r.organization_id == organization_id]

    def get_by_id(self, organization_id: str, record_id: str):
        self._check()
        row = self.rows.get(record_id)
        if row is None or row.organization_id != organization_id:
            return None
        return row

    def insert(self, row):
        self._check()
        self.rows[row.id] = row
        return row


class InMemoryWorkTime(_TenantRows):
    def find_for_day(self, organization_id, *, user_id, route_id, day_scheduled, shift_worked=None):
        self._check()
        for r in self.rows.values():
            if (
                r.organization_id == organization_id
                and r.user_id == user_id
                and r.route_id == route_id
                and r.day_scheduled == day_scheduled
                and (shift_worked is None or r.shift_worked == shift_worked)
            ):
                return r
        return None

    def update(self, organization_id, shift_id, *, summary, shift_worked, occupied, day_scheduled):
        self._check()
        row = self.get_by_id(organization_id, shift_id)
        if row is None:
            return None
        row = replace(row, summary=summary, shift_worked=shift_worked, occupied=occupied, day_scheduled=day_scheduled)
        self.rows[row.id] = row
        return row


class InMemoryRoutes(_TenantRows):
    def get_by_name(self, organization_id, route_nice_name):
        self._check()
        for r in self.rows.values():
            if r.organization_id == organization_id and r.route_nice_name == route_nice_name:
                return r
        return None


class InMemoryShiftInfos(_TenantRows):
    def __init__(self, rows=None):
        super().__init__(rows)
        self.reject_names: set = set()

    def insert(self, row):
        if row.shift_name in self.reject_names:
            raise StorageUnavailable()
        return super().insert(row)

    def list_for_route(self, organization_id, route_id):
        return [r for r in self.list_for_tenant(organization_id) if r.route_id == route_id]


class InMemoryEmployees(_TenantRows):
    pass


class LeakyRepo:
    """Ignores the tenant filter, like a broken query would."""

    def __init__(self, rows):
        self.rows = list(rows)

    def list_for_tenant(self, organization_id):
        return list(self.rows)

    def get_by_id(self, organization_id, record_id):
        for r in self.rows:
            if r.id == record_id:
                return r
        return None


class FakeVerifier:
    """Maps opaque test tokens to claims; anything else is an invalid token."""

    def __init__(self, tokens: Optional[Dict[str, Dict[str, Any]]] = None):
        self.tokens = dict(tokens or {})

    def verify(self, token: str) -> Dict[str, Any]:
        if token not in self.tokens:
            raise jwt.InvalidTokenError("unknown token")
        return dict(self.tokens[token])


def deep_merge(stored: Dict[str, Any], patch: Dict[str, Any]) -> Dict[str, Any]:
    """Clerk's metadata merge: nested objects merge, ``None`` deletes a key."""
    merged = dict(stored)
    for key, value in patch.items():
        if value is None:
            merged.pop(key, None)
        elif isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class InMemoryUserDirectory:
    def __init__(self, users: Optional[Dict[str, Dict[str, Any]]] = None):
        self.users: Dict[str, ProviderUser] = {
            uid: ProviderUser(user_id=uid, updated_at=1, private_metadata=dict(meta)) for uid, meta in (users or {}).items()
        }
        self.writes = 0
        self.fail_writes = False
        self.before_write: Optional[Callable[[str], None]] = None

    def get_user(self, user_id: str) -> ProviderUser:
        if user_id not in self.users:
            raise IdentityProviderError(f"Identity provider returned 404 for GET /users/{user_id}")
        return self.users[user_id]

    def merge_private_metadata(self, user_id: str, private_metadata: Dict[str, Any]) -> ProviderUser:
        if self.before_write is not None:
            self.before_write(user_id)
        if self.fail_writes:
            raise IdentityProviderError(f"Identity provider returned 500 for PATCH /users/{user_id}/metadata")
        if user_id not in self.users:
            raise IdentityProviderError(f"Identity provider returned 404 for PATCH /users/{user_id}/metadata")
        current = self.users[user_id]
        self.writes += 1
        updated = ProviderUser(
            user_id=user_id,
            updated_at=(current.updated_at or 0) + 1,
            private_metadata=deep_merge(current.private_metadata, private_metadata),
        )
        self.users[user_id] = updated
        return updated

    def touch(self, user_id: str, **extra: Any) -> None:
        """Simulate another writer changing the user."""
        current = self.users[user_id]
        self.users[user_id] = ProviderUser(
            user_id=user_id,
            updated_at=(current.updated_at or 0) + 1,
            private_metadata={**current.private_metadata, **extra},
        )


class FakeBilling:
    def __init__(self):
        self.subscriptions: Dict[str, ActiveSubscription] = {}
        self.prices: Dict[str, RecurringPrice] = {}
        self.next_change: Optional[SubscriptionChange] = None
        self.signatures: List[Optional[str]] = []

    def active_subscription(self, customer_id):
        return self.subscriptions.get(customer_id)

    def recurring_price(self, product_id):
        return self.prices.get(product_id)

    def parse_subscription_event(self, payload, signature):
        self.signatures.append(signature)
        return self.next_change


def work_time(shift_id, org, *, user_id="EMP-1", route_id="route-1", shift_worked="shift-1", day="2026-03-02T06:00:00.000Z"):
    return WorkTimeShift(
        id=shift_id,
        organization_id=org,
        user_id=user_id,
        route_id=route_id,
        shift_worked=shift_worked,
        day_scheduled=day,
        summary=None,
        occupied=True,
        date_added_to_cb="2026-03-01T08:00:00.000Z",
    )


def route(route_id, org, *, name=None):
    return Route(
        id=route_id,
        organization_id=org,
        route_nice_name=name or f"Route {route_id}",
        route_id_from_post_office="R-100",
        date_route_acquired="2026-01-01T00:00:00.000Z",
        date_added_to_cb="2026-01-01T00:00:00.000Z",
    )


def shift_info(shift_id, org, *, route_id="route-1", name="Morning"):
    return RouteShiftInfo(
        id=shift_id,
        organization_id=org,
        route_id=route_id,
        shift_name=name,
        start_time="06:00",
        end_time="14:00",
        date_added_to_cb="2026-01-01T00:00:00.000Z",
    )


def employee(employee_id, org, *, name="Dana"):
    return Employee(
        id=employee_id,
        clerk_id="user_admin",
        organization_id=org,
        user_nice_name=name,
        email="",
        phone="",
        date_hired="2026-01-01T00:00:00.000Z",
        date_added_to_cb="2026-01-01T00:00:00.000Z",
    )


def make_container(
    *,
    tokens=None,
    users=None,
    billing=None,
    work_time_repo=None,
    routes_repo=None,
    shift_info_repo=None,
    employees_repo=None,
) -> Container:
    return assemble(
        verifier=FakeVerifier(tokens),
        users=users or InMemoryUserDirectory(),
        billing=billing or FakeBilling(),
        work_time_repo=work_time_repo or InMemoryWorkTime(),
        routes_repo=routes_repo or InMemoryRoutes(),
        shift_info_repo=shift_info_repo or InMemoryShiftInfos(),
        employees_repo=employees_repo or InMemoryEmployees(),
    )
