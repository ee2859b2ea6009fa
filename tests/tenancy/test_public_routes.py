from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from src.timecard_system.timecard_system.core.constants import DEFAULT_PUBLIC_ROUTES
from src.timecard_system.timecard_system.tenancy.public_routes import PublicRoutes

ROUTES = PublicRoutes.of(DEFAULT_PUBLIC_ROUTES)


@pytest.mark.parametrize(
    "path",
    [
        "/",
        "/health",
        "/blog",
        "/blog/first-post",
        "/skill-tree/python",
        "/api/webhooks/stripe",
        "/api/uploadthing",
        "/api/get-work-time",
        "/api/stripe/get-price",
    ],
)
def test_public_paths(path):
    assert ROUTES.is_public(path)


@pytest.mark.parametrize(
    "path",
    [
        "/api/work-time",
        "/api/add-user",
        "/api/pdf-worktime-info",
        "/api/stripe/check-subscription",
        "/api/get-work-time/extra",
        "/dashboard",
    ],
)
def test_protected_paths(path):
    assert not ROUTES.is_public(path)


def test_allow_list_is_immutable_and_comparable():
    other = PublicRoutes.of(list(DEFAULT_PUBLIC_ROUTES))
    assert other == ROUTES
    with pytest.raises(FrozenInstanceError):
        ROUTES.patterns = ("/",)


def test_custom_allow_list():
    routes = PublicRoutes.of(["/only"])
    assert routes.is_public("/only")
    assert not routes.is_public("/health")
