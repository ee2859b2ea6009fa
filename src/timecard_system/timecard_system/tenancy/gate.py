from __future__ import annotations

from flask import Flask, g, request

from ..common.responses import error_response
from ..core.logging import get_logger
from ..identity.adapter import IdentityProviderAdapter
from ..identity.model import UNAUTHENTICATED
from .public_routes import PublicRoutes
from .resolver import TenantContext, resolve_tenant

log = get_logger(__name__)


def current_principal():
    return g.get("principal", UNAUTHENTICATED)


def install_auth_gate(app: Flask, identity: IdentityProviderAdapter, public_routes: PublicRoutes) -> None:
    """Authenticate every request and block non-public paths without a session."""

    @app.before_request
    def _authenticate():
        g.principal = identity.authenticate(request)
        if g.principal.is_authenticated or public_routes.is_public(request.path):
            return None

        log.info("request_unauthenticated", path=request.path, method=request.method)
        return error_response("Unauthorized", 401)

    @app.after_request
    def _log_request(response):
        principal = current_principal()
        log.info(
            "request_completed",
            method=request.method,
            path=request.path,
            status=response.status_code,
            user_id=principal.user_id,
            tenant=principal.organization_id,
        )
        return response


def tenant_for_request(requested=None, *, write: bool = False) -> TenantContext:
    return resolve_tenant(current_principal(), requested, write=write)
