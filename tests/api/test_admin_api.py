from __future__ import annotations

import json
import re

import pytest
from structlog.testing import capture_logs

from src.timecard_system.timecard_system import create_app
from src.timecard_system.timecard_system.billing.model import ActiveSubscription, RecurringPrice, SubscriptionChange
from src.timecard_system.timecard_system.core.exceptions import Conflict, MetadataUpdateFailed, StorageUnavailable, ValidationError
from src.timecard_system.timecard_system.tenancy.public_routes import PublicRoutes
from tests.fakes import FakeBilling, InMemoryEmployees, InMemoryRoutes, InMemoryUserDirectory, make_container

TOKENS = {"tok-admin": {"sub": "user_admin", "org_id": "org123", "org_role": "org:admin"}}
AUTH = {"Authorization": "Bearer tok-admin"}


class FailingEmployees(InMemoryEmployees):
    def __init__(self, error):
        super().__init__()
        self.error = error

    def insert(self, row):
        raise self.error


def _client(**overrides):
    app = create_app(container=make_container(tokens=TOKENS, **overrides), settings_module="config.testing")
    return app.test_client()


def test_health_is_public():
    resp = _client().get("/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok"}


def test_non_public_paths_need_a_session():
    client = _client()
    for path in ("/api/routes", "/api/employees", "/api/stripe/check-subscription"):
        assert client.get(path).status_code == 401


def test_invalid_token_is_treated_as_anonymous():
    resp = _client().get("/api/routes", headers={"Authorization": "Bearer forged"})
    assert resp.status_code == 401


def test_allow_list_is_injected():
    container = make_container(tokens=TOKENS)
    app = create_app(container=container, public_routes=PublicRoutes.of(["/health"]), settings_module="config.testing")
    assert app.test_client().get("/api/get-work-time?organizationID=org123").status_code == 401


def test_add_new_route_with_shift_json_string():
    resp = _client().post(
        "/api/add-new-route",
        json={
            "routeNiceName": "North",
            "routeIDFromPostOffice": "R-42",
            "allocatedShifts": json.dumps([{"name": "Morning", "startTime": "06:00", "endTime": "14:00"}]),
        },
        headers=AUTH,
    )
    data = resp.get_json()["data"]

    assert resp.status_code == 200
    assert data["route"]["routeNiceName"] == "North"
    assert data["route"]["organizationID"] == "org123"
    assert [s["shiftName"] for s in data["shiftInfo"]] == ["Morning"]


def test_add_new_route_rejects_malformed_shifts():
    resp = _client().post("/api/add-new-route", json={"routeNiceName": "North", "allocatedShifts": "[oops"}, headers=AUTH)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Invalid allocatedShifts format"}


def test_add_route_and_shifts_is_idempotent_by_name():
    routes = InMemoryRoutes()
    client = _client(routes_repo=routes)

    first = client.post("/api/add-route-and-shifts", json={"routeNiceName": "East"}, headers=AUTH).get_json()["data"]
    second = client.post("/api/add-route-and-shifts", json={"routeNiceName": "East"}, headers=AUTH).get_json()["data"]

    assert first["id"] == second["id"]
    assert len(routes.rows) == 1


def test_list_routes_after_create():
    client = _client()
    client.post("/api/add-route-and-shifts", json={"routeNiceName": "West"}, headers=AUTH)

    resp = client.get("/api/routes", headers=AUTH)

    assert [r["routeNiceName"] for r in resp.get_json()["data"]] == ["West"]
    assert resp.get_json()["data"][0]["shiftInfo"] == []


def test_add_user_creates_employee():
    employees = InMemoryEmployees()
    resp = _client(employees_repo=employees).post("/api/add-user", json={"employeeName": "Dana"}, headers=AUTH)
    data = resp.get_json()["data"]

    assert resp.status_code == 200
    assert re.fullmatch(r"EMP-\d+-[a-z0-9]{5}", data["id"])
    assert data["clerkID"] == "user_admin"
    assert data["organizationID"] == "org123"
    assert list(employees.rows) == [data["id"]]


def test_add_user_requires_name():
    resp = _client().post("/api/add-user", json={}, headers=AUTH)
    assert resp.status_code == 400


@pytest.mark.parametrize(
    "error, status, message",
    [
        (Conflict("Record already exists"), 409, "Record already exists"),
        (ValidationError("Invalid organization or user reference"), 400, "Invalid organization or user reference"),
        (StorageUnavailable("Database is busy", busy=True), 503, "Database is currently locked. Please try again later."),
        (StorageUnavailable("socket closed"), 500, "An unexpected error occurred while adding the employee."),
        (RuntimeError("driver bug"), 500, "An unexpected error occurred while adding the employee."),
    ],
)
def test_add_user_maps_storage_failures(error, status, message):
    resp = _client(employees_repo=FailingEmployees(error)).post("/api/add-user", json={"employeeName": "Dana"}, headers=AUTH)
    assert resp.status_code == status
    assert resp.get_json() == {"error": message}


def test_check_subscription_reads_customer_from_metadata():
    billing = FakeBilling()
    billing.subscriptions["cus_1"] = ActiveSubscription("sub_1", "prod_pro", 1772323200)
    users = InMemoryUserDirectory({"user_admin": {"stripeCustomerId": "cus_1"}})

    resp = _client(users=users, billing=billing).get("/api/stripe/check-subscription", headers=AUTH)

    assert resp.get_json() == {"isActive": True, "planId": "prod_pro", "expiresAt": "2026-03-01T00:00:00.000Z"}


def test_check_subscription_provider_failure_is_generic_500():
    resp = _client().get("/api/stripe/check-subscription", headers=AUTH)
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Internal server error"}


def test_get_price_is_public():
    billing = FakeBilling()
    billing.prices["prod_pro"] = RecurringPrice(1999, "usd")
    client = _client(billing=billing)

    assert client.get("/api/stripe/get-price?productId=prod_pro").get_json() == {"price": 1999, "currency": "usd"}
    assert client.get("/api/stripe/get-price").status_code == 400
    assert client.get("/api/stripe/get-price?productId=prod_none").status_code == 404


def test_stripe_webhook_merges_metadata():
    billing = FakeBilling()
    billing.next_change = SubscriptionChange(
        "customer.subscription.created", "user_admin", "cus_1", "sub_1", "active", "prod_pro", 1772323200
    )
    users = InMemoryUserDirectory({"user_admin": {}})

    resp = _client(users=users, billing=billing).post(
        "/api/webhooks/stripe", data=b"{}", headers={"Stripe-Signature": "t=1,v1=sig"}
    )

    assert resp.status_code == 200
    assert resp.get_json() == {"received": True, "handled": "customer.subscription.created"}
    assert users.users["user_admin"].private_metadata["subscription"]["subscriptionId"] == "sub_1"
    assert billing.signatures == ["t=1,v1=sig"]


def test_stripe_webhook_keeps_fields_written_concurrently():
    billing = FakeBilling()
    billing.next_change = SubscriptionChange(
        "customer.subscription.updated", "user_admin", "cus_1", "sub_1", "past_due", "prod_pro", None
    )
    users = InMemoryUserDirectory({"user_admin": {}})
    users.before_write = lambda user_id: users.touch(user_id, subscription={"seats": 5})

    resp = _client(users=users, billing=billing).post("/api/webhooks/stripe", data=b"{}", headers={"Stripe-Signature": "sig"})

    assert resp.status_code == 200
    stored = users.users["user_admin"].private_metadata["subscription"]
    assert stored["seats"] == 5
    assert stored["status"] == "past_due"


def test_stripe_webhook_metadata_failure_is_generic_500():
    billing = FakeBilling()
    billing.next_change = SubscriptionChange(
        "customer.subscription.deleted", "user_admin", "cus_1", "sub_1", "canceled", "prod_pro", None
    )
    users = InMemoryUserDirectory({"user_admin": {}})
    users.fail_writes = True

    with capture_logs() as logs:
        resp = _client(users=users, billing=billing).post(
            "/api/webhooks/stripe", data=b"{}", headers={"Stripe-Signature": "sig"}
        )

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Webhook handling failed"}
    failures = [e for e in logs if e["event"] == "stripe_webhook_failed"]
    assert failures and isinstance(failures[0]["exc_info"], MetadataUpdateFailed)
