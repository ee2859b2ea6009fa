from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import domain_error_response, error_response, revalidated
from ..common.validators import require_json_object
from ..container import Container
from ..core.exceptions import DomainError
from ..core.logging import get_logger
from ..tenancy.gate import current_principal, tenant_for_request

log = get_logger(__name__)

ADD_EMPLOYEE_FAILED = "An unexpected error occurred while adding the employee."


def register(app: Flask, container: Container) -> None:
    @app.route("/api/add-user", methods=["POST"], endpoint="add_user")
    def add_user():
        try:
            body = require_json_object(request.get_json(silent=True))
            tenant = tenant_for_request(write=True)

            employee = container.employee_service.add_employee(
                tenant.organization_id,
                created_by=current_principal().user_id,
                employee_name=body.get("employeeName"),
            )
            return revalidated(employee.to_json())
        except DomainError as e:
            return domain_error_response(e, event="employee_add_failed", fallback=ADD_EMPLOYEE_FAILED)
        except Exception:
            log.exception("employee_add_failed")
            return error_response(ADD_EMPLOYEE_FAILED, 500)

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    def list_employees():
        try:
            tenant = tenant_for_request()
            employees = container.employee_service.list_employees(tenant.organization_id)
            return jsonify({"data": [e.to_json() for e in employees]})
        except DomainError as e:
            return domain_error_response(e, event="employee_list_failed", fallback="Internal Server Error")
        except Exception:
            log.exception("employee_list_failed")
            return error_response("Internal Server Error", 500)
