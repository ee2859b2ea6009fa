from __future__ import annotations

import pytest

from src.timecard_system.timecard_system.core.exceptions import MissingTenant, TenantMismatch
from src.timecard_system.timecard_system.identity.model import UNAUTHENTICATED, Principal
from src.timecard_system.timecard_system.tenancy.resolver import resolve_tenant


def test_authenticated_tenant_wins_on_read():
    ctx = resolve_tenant(Principal("user_1", "org_a"))
    assert ctx.organization_id == "org_a"


def test_read_with_matching_param_is_allowed():
    ctx = resolve_tenant(Principal("user_1", "org_a"), "org_a")
    assert ctx.organization_id == "org_a"


def test_read_with_other_tenant_param_is_rejected():
    with pytest.raises(TenantMismatch):
        resolve_tenant(Principal("user_1", "org_a"), "org_b")


def test_write_ignores_caller_supplied_tenant():
    ctx = resolve_tenant(Principal("user_1", "org_a"), "org_b", write=True)
    assert ctx.organization_id == "org_a"


def test_unauthenticated_read_falls_back_to_param():
    ctx = resolve_tenant(UNAUTHENTICATED, " org123 ")
    assert ctx.organization_id == "org123"


@pytest.mark.parametrize("requested", [None, "", "   "])
def test_unauthenticated_read_without_param_is_missing(requested):
    with pytest.raises(MissingTenant):
        resolve_tenant(UNAUTHENTICATED, requested)


def test_unauthenticated_write_never_uses_param():
    with pytest.raises(MissingTenant):
        resolve_tenant(UNAUTHENTICATED, "org123", write=True)


def test_signed_in_without_org_cannot_write():
    with pytest.raises(MissingTenant):
        resolve_tenant(Principal("user_1"), write=True)


@pytest.mark.parametrize("org_id", [None, "  "])
def test_signed_in_without_org_cannot_read_another_tenant_by_param(org_id):
    with pytest.raises(MissingTenant):
        resolve_tenant(Principal("user_1", org_id), "org_a")
