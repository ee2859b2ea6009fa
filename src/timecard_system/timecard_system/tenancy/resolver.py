from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.exceptions import MissingTenant, TenantMismatch
from ..identity.model import AuthResult


@dataclass(frozen=True)
class TenantContext:
    """The organization a request acts for. Derived per request, never cached."""

    organization_id: str


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def resolve_tenant(principal: AuthResult, requested: Optional[str] = None, *, write: bool = False) -> TenantContext:
    """Pick the tenant for a request.

    The authenticated organization always wins. Writes ignore any caller-supplied
    tenant; reads reject one that differs from the caller's own. Only anonymous
    reads may fall back to the request parameter; a signed-in user without an
    organization never can.
    """
    if principal.is_authenticated:
        own = _clean(principal.organization_id)
        if not own:
            raise MissingTenant("Organization ID is required")
        if not write and _clean(requested) not in (None, own):
            raise TenantMismatch("Organization does not match the signed-in organization")
        return TenantContext(organization_id=own)

    asked = _clean(requested)
    if write or not asked:
        raise MissingTenant("Organization ID is required")

    return TenantContext(organization_id=asked)
