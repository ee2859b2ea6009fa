from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import domain_error_response, error_response, revalidated
from ..common.validators import require_json_object
from ..container import Container
from ..core.exceptions import DomainError
from ..core.logging import get_logger
from ..tenancy.gate import tenant_for_request
from .service import parse_allocated_shifts

log = get_logger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/add-new-route", methods=["POST"], endpoint="add_new_route")
    def add_new_route():
        try:
            body = require_json_object(request.get_json(silent=True))
            allocated = parse_allocated_shifts(body.get("allocatedShifts"))
            tenant = tenant_for_request(write=True)

            route, shift_info = container.route_service.add_route_with_shifts(
                tenant.organization_id,
                route_nice_name=body.get("routeNiceName"),
                route_id_from_post_office=body.get("routeIDFromPostOffice"),
                allocated_shifts=allocated,
                img=body.get("img"),
            )
            return revalidated({"route": route.to_json(), "shiftInfo": [s.to_json() for s in shift_info]})
        except DomainError as e:
            return domain_error_response(e, event="route_create_failed", fallback="Something went wrong")
        except Exception:
            log.exception("route_create_failed")
            return error_response("Something went wrong", 500)

    @app.route("/api/add-route-and-shifts", methods=["POST"], endpoint="add_route_and_shifts")
    def add_route_and_shifts():
        try:
            body = require_json_object(request.get_json(silent=True))
            tenant = tenant_for_request(write=True)

            route, _ = container.route_service.find_or_create_route(
                tenant.organization_id,
                route_nice_name=body.get("routeNiceName"),
                route_id_from_post_office=body.get("routeIDFromPostOffice"),
                img=body.get("img"),
            )
            return revalidated(route.to_json())
        except DomainError as e:
            return domain_error_response(e, event="route_create_failed", fallback="Something went wrong")
        except Exception:
            log.exception("route_create_failed")
            return error_response("Something went wrong", 500)

    @app.route("/api/routes", methods=["GET"], endpoint="list_routes")
    def list_routes():
        try:
            tenant = tenant_for_request()
            return jsonify({"data": container.route_service.list_routes_with_shifts(tenant.organization_id)})
        except DomainError as e:
            return domain_error_response(e, event="route_list_failed", fallback="Internal Server Error")
        except Exception:
            log.exception("route_list_failed")
            return error_response("Internal Server Error", 500)
