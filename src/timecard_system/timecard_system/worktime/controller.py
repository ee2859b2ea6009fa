from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import domain_error_response, error_response, revalidated
from ..container import Container
from ..core.exceptions import DomainError
from ..core.logging import get_logger
from ..tenancy.gate import tenant_for_request
from .service import parse_work_time_batch, parse_work_time_input

log = get_logger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/get-work-time", methods=["GET"], endpoint="get_work_time")
    def get_work_time():
        """Shifts of one organization; the signed-in organization wins over the query string."""
        try:
            tenant = tenant_for_request(request.args.get("organizationID"))
            shifts = container.work_time_service.list_for_tenant(tenant.organization_id)
            return jsonify([s.to_json() for s in shifts])
        except DomainError as e:
            return domain_error_response(e, event="work_time_fetch_failed", fallback="Internal Server Error")
        except Exception:
            log.exception("work_time_fetch_failed")
            return error_response("Internal Server Error", 500)

    @app.route("/api/pdf-worktime-info", methods=["GET"], endpoint="pdf_worktime_info")
    def pdf_worktime_info():
        try:
            tenant = tenant_for_request()
            shifts = container.work_time_service.list_for_tenant(tenant.organization_id)
            return jsonify({"data": [s.to_json() for s in shifts]}), 200
        except DomainError as e:
            return domain_error_response(e, event="pdf_worktime_fetch_failed", fallback="Failed to fetch work time data")
        except Exception:
            log.exception("pdf_worktime_fetch_failed")
            return error_response("Failed to fetch work time data", 500)

    @app.route("/api/work-time", methods=["POST"], endpoint="work_time")
    def work_time():
        try:
            record = parse_work_time_input(request.get_json(silent=True))
            tenant = tenant_for_request(write=True)
            saved = container.work_time_service.record_shift(tenant.organization_id, record)
            return revalidated(saved.to_json())
        except DomainError as e:
            return domain_error_response(e, event="work_time_save_failed", fallback="Something went wrong")
        except Exception:
            log.exception("work_time_save_failed")
            return error_response("Something went wrong", 500)

    @app.route("/api/add-work-time", methods=["POST"], endpoint="add_work_time")
    def add_work_time():
        try:
            records = parse_work_time_batch(request.get_json(silent=True))
            tenant = tenant_for_request(write=True)
            saved = container.work_time_service.schedule_shifts(tenant.organization_id, records)
            return revalidated([s.to_json() for s in saved])
        except DomainError as e:
            return domain_error_response(e, event="work_time_schedule_failed", fallback="Something went wrong")
        except Exception:
            log.exception("work_time_schedule_failed")
            return error_response("Something went wrong", 500)
